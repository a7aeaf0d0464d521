"""Comparison configuration."""

from dataclasses import dataclass
from typing import Any

from diffbib.errors import ConfigurationError
from diffbib.matching import (
    DEFAULT_FIELDS_CSV,
    SIMILARITY_THRESHOLD,
    Strategy,
    normalize_fields,
    parse_fields_csv,
    resolve_strategy,
    validate_threshold,
)


@dataclass
class DiffConfig:
    """Configuration for comparing two bibliographies.

    Attributes
    ----------
    strategy : Strategy | str
        Matching strategy, "hash" or "bruteforce" (default: "hash").
    fields : list[str] | str
        Fields to compare, as a list or a comma-separated string
        (default: "key,title"). Stored normalized after validation.
    threshold : float
        Similarity threshold for the bruteforce strategy (default: 0.3).
    strict : bool
        Fail a load when the reader reports errors (default: True).
    """

    strategy: Strategy | str = Strategy.HASH
    fields: list[str] | str = DEFAULT_FIELDS_CSV
    threshold: float = SIMILARITY_THRESHOLD
    strict: bool = True

    def __post_init__(self) -> None:
        """Resolve the strategy, normalize fields and validate.

        Raises
        ------
        ConfigurationError
            If any setting is invalid.
        """
        self.strategy = resolve_strategy(self.strategy)

        if isinstance(self.fields, str):
            names = parse_fields_csv(self.fields)
        else:
            names = [name.strip() for name in self.fields]
            if not names or not all(names):
                raise ConfigurationError(f"fields must be non-empty names, got {self.fields!r}")

        self.fields = normalize_fields(names)
        validate_threshold(self.threshold)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "strategy": str(self.strategy),
            "fields": list(self.fields),
            "threshold": self.threshold,
            "strict": self.strict,
        }
