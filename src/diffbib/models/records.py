"""Flat bibliographic record model.

A record is a read-only mapping from field name to string value. The
reader stores the citation key under ``"key"`` and the entry type under
``"type"``; every other field name is upper-cased (``TITLE``, ``AUTHOR``,
``YEAR``...). The field normalizer in :mod:`diffbib.matching.fields`
relies on this convention.
"""

from collections.abc import Mapping
from types import MappingProxyType

__all__ = [
    "BibRecord",
    "IDENTIFIER_FIELD",
    "ENTRY_TYPE_FIELD",
    "freeze_record",
    "record_key",
]

BibRecord = Mapping[str, str]

# Citation key, exempt from case normalization
IDENTIFIER_FIELD = "key"

ENTRY_TYPE_FIELD = "type"


def freeze_record(fields: Mapping[str, str]) -> BibRecord:
    """Return an immutable copy of *fields*.

    Parameters
    ----------
    fields : Mapping[str, str]
        Field name to value mapping.

    Returns
    -------
    BibRecord
        Read-only mapping detached from the input.
    """
    return MappingProxyType(dict(fields))


def record_key(record: BibRecord) -> str:
    """Return the citation key of *record*, or an empty string."""
    return record.get(IDENTIFIER_FIELD, "")
