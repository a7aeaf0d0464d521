"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from diffbib.models import BibRecord, freeze_record  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to BibTeX fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def make_record() -> Callable[..., BibRecord]:
    """Factory for flat records shaped like the BibTeX reader's output.

    Keyword fields are stored upper-cased; pass ``key=None`` for a
    record without citation key.
    """

    def _factory(
        key: str | None = "rec_001",
        *,
        entry_type: str = "article",
        **fields: str,
    ) -> BibRecord:
        data = {"type": entry_type}
        if key is not None:
            data["key"] = key
        data.update({name.upper(): value for name, value in fields.items()})
        return freeze_record(data)

    return _factory
