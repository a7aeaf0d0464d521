"""Tests for comparison configuration."""

import pytest

from diffbib.engine import DiffConfig
from diffbib.errors import ConfigurationError
from diffbib.matching import Strategy


@pytest.mark.unit
def test_defaults() -> None:
    """Defaults are hash on key,title with threshold 0.3."""
    config = DiffConfig()

    assert config.strategy is Strategy.HASH
    assert config.fields == ["key", "TITLE"]
    assert config.threshold == 0.3
    assert config.strict is True


@pytest.mark.unit
def test_fields_from_csv_are_normalized() -> None:
    """A CSV field list is split, stripped and normalized."""
    config = DiffConfig(strategy="bruteforce", fields=" title , year ")

    assert config.strategy is Strategy.BRUTEFORCE
    assert config.fields == ["TITLE", "YEAR"]


@pytest.mark.unit
def test_fields_from_list() -> None:
    """A list of field names is accepted."""
    assert DiffConfig(fields=["key", "journal"]).fields == ["key", "JOURNAL"]


@pytest.mark.unit
@pytest.mark.parametrize("fields", ["", ",", [], ["key", " "]])
def test_invalid_fields(fields: str | list[str]) -> None:
    """Empty field lists or names are rejected."""
    with pytest.raises(ConfigurationError):
        DiffConfig(fields=fields)


@pytest.mark.unit
def test_unknown_strategy() -> None:
    """Unknown strategies are rejected with the options listed."""
    with pytest.raises(ConfigurationError, match='Options are: "hash", "bruteforce"'):
        DiffConfig(strategy="fuzzy")


@pytest.mark.unit
@pytest.mark.parametrize("threshold", [0.0, 1.5, -1.0])
def test_invalid_threshold(threshold: float) -> None:
    """Thresholds outside (0, 1] are rejected."""
    with pytest.raises(ConfigurationError):
        DiffConfig(threshold=threshold)


@pytest.mark.unit
def test_configuration_error_is_value_error() -> None:
    """Callers catching ValueError also catch configuration errors."""
    with pytest.raises(ValueError):
        DiffConfig(strategy="nope")


@pytest.mark.unit
def test_to_dict() -> None:
    """to_dict gives plain JSON-ready values."""
    config = DiffConfig(strategy="bruteforce", fields="title", threshold=0.25, strict=False)

    assert config.to_dict() == {
        "strategy": "bruteforce",
        "fields": ["TITLE"],
        "threshold": 0.25,
        "strict": False,
    }
