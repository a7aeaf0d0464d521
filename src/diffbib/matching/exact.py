"""Exact matching by fingerprint ("hash" strategy).

Each collection is indexed by record fingerprint and the buckets are
the set intersection and differences of the two indexes. Records that
share a fingerprint within one collection collapse into a single entry.
"""

from collections.abc import Sequence

from diffbib.matching.fields import normalize_fields
from diffbib.matching.keys import build_lookup_table
from diffbib.matching.models import DiffResult, StopHook, check_stop
from diffbib.models import BibRecord

__all__ = ["STRATEGY_NAME", "match_exact"]

STRATEGY_NAME = "hash"


def match_exact(
    fields: Sequence[str],
    origin: Sequence[BibRecord],
    destiny: Sequence[BibRecord],
    *,
    should_stop: StopHook | None = None,
) -> DiffResult:
    """Classify records by exact equality of their compared fields.

    Parameters
    ----------
    fields : Sequence[str]
        Field names to compare; normalized before use.
    origin : Sequence[BibRecord]
        First collection.
    destiny : Sequence[BibRecord]
        Second collection.
    should_stop : StopHook | None, optional
        Polled after each origin and destiny entry.

    Returns
    -------
    DiffResult
        ``common`` holds the origin representative of each shared
        fingerprint. Bucket order follows first occurrence.

    Raises
    ------
    ComparisonCancelledError
        If *should_stop* returns True.

    Examples
    --------
        >>> a = [{"key": "a1", "TITLE": "Deep Learning"}]
        >>> result = match_exact(["key", "title"], a, list(a))
        >>> result.counts()
        {'common': 1, 'only_origin': 0, 'only_destiny': 0}
    """
    normalized = normalize_fields(fields)

    origin_table = build_lookup_table(origin, normalized)
    destiny_table = build_lookup_table(destiny, normalized)

    common: list[BibRecord] = []
    only_origin: list[BibRecord] = []
    only_destiny: list[BibRecord] = []
    processed = 0

    for key, record in origin_table.items():
        if key in destiny_table:
            common.append(record)
        else:
            only_origin.append(record)
        processed += 1
        check_stop(should_stop, STRATEGY_NAME, processed)

    for key, record in destiny_table.items():
        if key not in origin_table:
            only_destiny.append(record)
        processed += 1
        check_stop(should_stop, STRATEGY_NAME, processed)

    return DiffResult(
        common=tuple(common),
        only_origin=tuple(only_origin),
        only_destiny=tuple(only_destiny),
        strategy=STRATEGY_NAME,
        fields=tuple(normalized),
    )
