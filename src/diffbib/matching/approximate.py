"""Approximate matching by edit distance ("bruteforce" strategy).

Every record is compared with every record of the other collection,
field by field, using the Levenshtein distance. A field pair is "close
enough" when its normalized distance stays below the similarity
threshold. The nearest acceptable candidate is tracked with per-field
early exits; there is no indexing or pruning beyond that.

Only the origin pass fills ``common``. Destiny records that find an
origin counterpart are simply left out of ``only_destiny``, so the
strategy is not symmetric.
"""

from collections.abc import Sequence

import Levenshtein

from diffbib.matching.fields import normalize_fields
from diffbib.matching.models import DiffResult, StopHook, check_stop
from diffbib.models import BibRecord

__all__ = [
    "STRATEGY_NAME",
    "SIMILARITY_THRESHOLD",
    "normalized_distance",
    "find_closest",
    "match_approximate",
]

STRATEGY_NAME = "bruteforce"

SIMILARITY_THRESHOLD = 0.3


def _scale(distance: int, a: str, b: str) -> float:
    return distance / max(len(a) or 1, len(b) or 1)


def normalized_distance(a: str, b: str) -> float:
    """Levenshtein distance of *a* and *b* over the longer length.

    Parameters
    ----------
    a : str
        First value.
    b : str
        Second value.

    Returns
    -------
    float
        0.0 for identical strings, 1.0 when nothing is shared. The divisor
        is never below 1, so two empty strings give 0.0.
    """
    return _scale(Levenshtein.distance(a, b), a, b)


def find_closest(
    record: BibRecord,
    fields: Sequence[str],
    candidates: Sequence[BibRecord],
    threshold: float = SIMILARITY_THRESHOLD,
) -> BibRecord | None:
    """Find the candidate nearest to *record*.

    Parameters
    ----------
    record : BibRecord
        Record to look up.
    fields : Sequence[str]
        Normalized field names, compared in order. Missing values count as
        empty strings.
    candidates : Sequence[BibRecord]
        Records of the other collection, scanned in order.
    threshold : float, optional
        Normalized distances at or above this value reject the candidate,
        by default 0.3.

    Returns
    -------
    BibRecord | None
        Best candidate, or None if no candidate passed the threshold.

    Notes
    -----
    For each candidate the fields are visited in order:

    - a field at or above the threshold abandons the candidate;
    - the first acceptable candidate becomes the best one;
    - otherwise the raw distance is compared with the best candidate's
      distance on the same field. Worse abandons the candidate, better
      replaces the best one, and a tie moves on to the next field.

    Only the deciding field's distance is remembered for a new best;
    other fields are computed on demand.
    """
    best: BibRecord | None = None
    best_distances: dict[str, int] = {}

    for candidate in candidates:
        for field in fields:
            value = record.get(field, "")
            other = candidate.get(field, "")
            distance = Levenshtein.distance(value, other)

            if _scale(distance, value, other) >= threshold:
                break

            if best is None:
                best = candidate
                best_distances = {field: distance}
                break

            best_distance = best_distances.get(field)
            if best_distance is None:
                best_distance = Levenshtein.distance(value, best.get(field, ""))
                best_distances[field] = best_distance

            if distance > best_distance:
                break

            if distance < best_distance:
                best = candidate
                best_distances = {field: distance}
                break

    return best


def match_approximate(
    fields: Sequence[str],
    origin: Sequence[BibRecord],
    destiny: Sequence[BibRecord],
    *,
    threshold: float = SIMILARITY_THRESHOLD,
    should_stop: StopHook | None = None,
) -> DiffResult:
    """Classify records by nearest-neighbour search on edit distance.

    Parameters
    ----------
    fields : Sequence[str]
        Field names to compare; normalized before use.
    origin : Sequence[BibRecord]
        First collection.
    destiny : Sequence[BibRecord]
        Second collection.
    threshold : float, optional
        Similarity threshold, by default 0.3.
    should_stop : StopHook | None, optional
        Polled after each top-level record of either pass.

    Returns
    -------
    DiffResult
        ``common`` and ``only_origin`` from the origin pass,
        ``only_destiny`` from the destiny pass.

    Raises
    ------
    ComparisonCancelledError
        If *should_stop* returns True.

    Notes
    -----
    Runs in O(|origin| x |destiny| x fields x length) and suits small
    to medium bibliographies.
    """
    normalized = normalize_fields(fields)

    common: list[BibRecord] = []
    only_origin: list[BibRecord] = []
    only_destiny: list[BibRecord] = []
    processed = 0

    for record in origin:
        if find_closest(record, normalized, destiny, threshold) is not None:
            common.append(record)
        else:
            only_origin.append(record)
        processed += 1
        check_stop(should_stop, STRATEGY_NAME, processed)

    for record in destiny:
        if find_closest(record, normalized, origin, threshold) is None:
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
