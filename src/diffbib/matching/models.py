"""Result model shared by the matching strategies."""

from collections.abc import Callable
from dataclasses import dataclass
from diffbib.errors import ComparisonCancelledError
from diffbib.models import BibRecord, record_key

__all__ = ["DiffResult", "BUCKETS", "StopHook", "check_stop"]

BUCKETS = ("common", "only_origin", "only_destiny")

# Polled after each top-level record; returning True aborts the match
StopHook = Callable[[], bool]


def check_stop(should_stop: StopHook | None, strategy: str, processed: int) -> None:
    """Raise :class:`ComparisonCancelledError` if *should_stop* asks for it.

    Parameters
    ----------
    should_stop : StopHook | None
        Cooperative cancellation hook, or None to never stop.
    strategy : str
        Strategy name, used in the error message.
    processed : int
        Top-level records handled so far.
    """
    if should_stop is not None and should_stop():
        raise ComparisonCancelledError(
            f"{strategy} comparison cancelled after {processed} record(s)"
        )


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Three-bucket outcome of one comparison.

    Attributes
    ----------
    common : tuple[BibRecord, ...]
        Origin records that have a counterpart in the destiny collection.
    only_origin : tuple[BibRecord, ...]
        Origin records without a counterpart.
    only_destiny : tuple[BibRecord, ...]
        Destiny records without a counterpart in the origin collection.
    strategy : str
        Name of the strategy that produced the result.
    fields : tuple[str, ...]
        Normalized field names that were compared.
    """

    common: tuple[BibRecord, ...]
    only_origin: tuple[BibRecord, ...]
    only_destiny: tuple[BibRecord, ...]
    strategy: str
    fields: tuple[str, ...]

    def bucket(self, name: str) -> tuple[BibRecord, ...]:
        """Return the bucket called *name* (one of :data:`BUCKETS`)."""
        if name not in BUCKETS:
            raise KeyError(f"Unknown bucket: {name!r}. Valid buckets: {', '.join(BUCKETS)}")
        return getattr(self, name)  # type: ignore[no-any-return]

    def keys(self, name: str) -> list[str]:
        """Return the citation keys of bucket *name*, ``""`` for keyless records."""
        return [record_key(record) for record in self.bucket(name)]

    def counts(self) -> dict[str, int]:
        """Return the size of each bucket."""
        return {name: len(self.bucket(name)) for name in BUCKETS}
