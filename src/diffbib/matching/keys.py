"""Record fingerprints for exact matching.

A fingerprint is the SHA-256 hex digest of the record's compared field
values joined with :data:`FIELD_DELIMITER`. It is an equality proxy only
and is never reversed.
"""

from collections.abc import Iterable, Sequence

from diffbib.models import BibRecord
from diffbib.utils import sha256_hex

__all__ = ["FIELD_DELIMITER", "project", "fingerprint", "build_lookup_table"]

FIELD_DELIMITER = "###"


def project(record: BibRecord, fields: Sequence[str]) -> list[str]:
    """Return the values of *fields* in *record*, ``""`` where absent."""
    return [record.get(field, "") for field in fields]


def fingerprint(record: BibRecord, fields: Sequence[str]) -> str:
    """Compute the fingerprint of *record* over *fields*.

    Parameters
    ----------
    record : BibRecord
        Record to fingerprint.
    fields : Sequence[str]
        Normalized field names, in order.

    Returns
    -------
    str
        64-character lowercase hex SHA-256 digest.

    Notes
    -----
    Fields not listed in *fields* do not influence the result. The
    delimiter is not escaped; accidental collisions are left to the
    digest.
    """
    return sha256_hex(FIELD_DELIMITER.join(project(record, fields)))


def build_lookup_table(records: Iterable[BibRecord], fields: Sequence[str]) -> dict[str, BibRecord]:
    """Index *records* by fingerprint.

    Parameters
    ----------
    records : Iterable[BibRecord]
        One collection, in input order.
    fields : Sequence[str]
        Normalized field names.

    Returns
    -------
    dict[str, BibRecord]
        Fingerprint to record. When two records share a fingerprint the
        later one replaces the earlier value while the entry keeps the
        position of the first occurrence.
    """
    table: dict[str, BibRecord] = {}
    for record in records:
        table[fingerprint(record, fields)] = record
    return table
