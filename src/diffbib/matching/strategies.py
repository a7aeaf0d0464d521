"""Strategy selection and invocation.

The set of strategies is closed: adding one means adding a ``Strategy``
member and an entry in ``_MATCHERS``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum

from diffbib.errors import ConfigurationError
from diffbib.matching.approximate import SIMILARITY_THRESHOLD, match_approximate
from diffbib.matching.exact import match_exact
from diffbib.matching.fields import DEFAULT_FIELDS_CSV, normalize_fields, parse_fields_csv
from diffbib.matching.models import DiffResult, StopHook
from diffbib.models import BibRecord

__all__ = [
    "Strategy",
    "MatchFn",
    "resolve_strategy",
    "strategy_options",
    "validate_threshold",
    "get_matcher",
    "run_strategy",
    "invoke",
]

MatchFn = Callable[..., DiffResult]


class Strategy(StrEnum):
    """Available matching strategies.

    Attributes
    ----------
    HASH : str
        Exact equality of the compared fields via fingerprints.
    BRUTEFORCE : str
        Nearest neighbour under normalized edit distance.
    """

    HASH = "hash"
    BRUTEFORCE = "bruteforce"


_MATCHERS: dict[Strategy, MatchFn] = {
    Strategy.HASH: match_exact,
    Strategy.BRUTEFORCE: match_approximate,
}


def strategy_options() -> str:
    """Return the valid strategy names formatted for messages."""
    return ", ".join(f'"{s.value}"' for s in Strategy)


def resolve_strategy(name: str | Strategy) -> Strategy:
    """Resolve a strategy name.

    Parameters
    ----------
    name : str | Strategy
        Strategy name such as ``"hash"``.

    Returns
    -------
    Strategy
        Matching enumeration member.

    Raises
    ------
    ConfigurationError
        If *name* is not a known strategy.
    """
    try:
        return Strategy(name)
    except ValueError:
        raise ConfigurationError(
            f"Unknown strategy: {name!r}. Options are: {strategy_options()}"
        ) from None


def validate_threshold(threshold: float) -> float:
    """Check that *threshold* lies in (0, 1].

    Raises
    ------
    ConfigurationError
        If the threshold is out of range.
    """
    if not 0.0 < threshold <= 1.0:
        raise ConfigurationError(f"threshold must be in (0, 1], got {threshold}")
    return threshold


def get_matcher(strategy: Strategy) -> MatchFn:
    """Return the match function implementing *strategy*."""
    return _MATCHERS[strategy]


def run_strategy(
    strategy: Strategy,
    fields: Sequence[str],
    origin: Sequence[BibRecord] | None,
    destiny: Sequence[BibRecord] | None,
    *,
    threshold: float = SIMILARITY_THRESHOLD,
    should_stop: StopHook | None = None,
) -> DiffResult:
    """Run *strategy* on two loaded collections.

    The threshold only applies to :attr:`Strategy.BRUTEFORCE`.

    Raises
    ------
    TypeError
        If either collection is None.
    """
    if origin is None or destiny is None:
        missing = "origin" if origin is None else "destiny"
        raise TypeError(f"{missing} collection is missing; load both sides before comparing")

    matcher = get_matcher(strategy)
    if strategy is Strategy.BRUTEFORCE:
        return matcher(fields, origin, destiny, threshold=threshold, should_stop=should_stop)
    return matcher(fields, origin, destiny, should_stop=should_stop)


def invoke(
    strategy_name: str,
    fields_csv: str = DEFAULT_FIELDS_CSV,
    origin: Sequence[BibRecord] | None = None,
    destiny: Sequence[BibRecord] | None = None,
    *,
    threshold: float = SIMILARITY_THRESHOLD,
    should_stop: StopHook | None = None,
) -> DiffResult:
    """Compare two collections with a named strategy.

    The strategy name, field list and threshold are validated before any
    record is processed.

    Parameters
    ----------
    strategy_name : str
        ``"hash"`` or ``"bruteforce"``.
    fields_csv : str, optional
        Comma-separated field names, by default ``"key,title"``.
    origin : Sequence[BibRecord] | None, optional
        First collection. Required; None raises TypeError.
    destiny : Sequence[BibRecord] | None, optional
        Second collection. Required; None raises TypeError.
    threshold : float, optional
        Similarity threshold for the bruteforce strategy, by default 0.3.
    should_stop : StopHook | None, optional
        Cooperative cancellation hook.

    Returns
    -------
    DiffResult
        Three-bucket result.

    Raises
    ------
    ConfigurationError
        If the strategy, the field list or the threshold is invalid.
    TypeError
        If either collection is missing.

    Examples
    --------
        >>> result = invoke("bruteforce", "title", origin, destiny)
        >>> result.keys("only_destiny")
    """
    strategy = resolve_strategy(strategy_name)
    fields = normalize_fields(parse_fields_csv(fields_csv))
    validate_threshold(threshold)

    return run_strategy(
        strategy,
        fields,
        origin,
        destiny,
        threshold=threshold,
        should_stop=should_stop,
    )
