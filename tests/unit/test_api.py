"""Tests for the public API module."""

import json
from pathlib import Path

import pytest

from diffbib import (
    ConfigurationError,
    DiffReport,
    DiffResult,
    SourceLoadError,
    compare,
    compare_files,
    load_bib,
    write_jsonl,
)
from diffbib.audit import AuditLogger


@pytest.fixture
def origin_bib(fixtures_dir: Path) -> Path:
    """Path to origin fixture."""
    return fixtures_dir / "origin.bib"


@pytest.fixture
def destiny_bib(fixtures_dir: Path) -> Path:
    """Path to destiny fixture."""
    return fixtures_dir / "destiny.bib"


# ---------------------------------------------------------------------------
# load_bib
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_load_bib_returns_list(origin_bib: Path) -> None:
    """Test load_bib returns records in file order."""
    records = load_bib(origin_bib)

    assert isinstance(records, list)
    assert [r["key"] for r in records] == ["smith2020", "doe2019", "lee2021"]


@pytest.mark.unit
def test_load_bib_side_in_error(tmp_path: Path) -> None:
    """Test the side keyword is reported on failure."""
    with pytest.raises(SourceLoadError) as exc_info:
        load_bib(tmp_path / "nope.bib", side="destiny")

    assert exc_info.value.side == "destiny"


@pytest.mark.unit
def test_load_bib_lenient(fixtures_dir: Path) -> None:
    """Test lenient loading of a file with reader errors."""
    assert load_bib(fixtures_dir / "malformed.bib", strict=False) == []


# ---------------------------------------------------------------------------
# compare
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_compare_hash(origin_bib: Path, destiny_bib: Path) -> None:
    """Test exact comparison of loaded collections."""
    result = compare(load_bib(origin_bib), load_bib(destiny_bib, side="destiny"))

    assert isinstance(result, DiffResult)
    assert result.keys("common") == ["smith2020"]
    assert result.keys("only_origin") == ["doe2019", "lee2021"]
    assert result.keys("only_destiny") == ["doe2019", "kim2022"]


@pytest.mark.unit
def test_compare_bruteforce(origin_bib: Path, destiny_bib: Path) -> None:
    """Test approximate comparison tolerates small title edits."""
    result = compare(
        load_bib(origin_bib),
        load_bib(destiny_bib, side="destiny"),
        strategy="bruteforce",
        fields="title",
    )

    assert result.keys("common") == ["smith2020", "doe2019"]
    assert result.keys("only_origin") == ["lee2021"]
    assert result.keys("only_destiny") == ["kim2022"]


@pytest.mark.unit
def test_compare_unknown_strategy() -> None:
    """Test unknown strategy raises ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Unknown strategy"):
        compare([], [], strategy="fuzzy")


# ---------------------------------------------------------------------------
# compare_files
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_compare_files_report(origin_bib: Path, destiny_bib: Path) -> None:
    """Test end-to-end comparison returns a populated report."""
    report = compare_files(origin_bib, destiny_bib)

    assert isinstance(report, DiffReport)
    assert report.origin_entries == 3
    assert report.destiny_entries == 3
    assert report.origin is not None
    assert report.origin["path"] == str(origin_bib)
    assert report.threshold is None


@pytest.mark.unit
def test_compare_files_bruteforce_reports_threshold(origin_bib: Path, destiny_bib: Path) -> None:
    """Test the threshold is part of a bruteforce report."""
    report = compare_files(origin_bib, destiny_bib, strategy="bruteforce", threshold=0.2)

    assert report.threshold == 0.2


@pytest.mark.unit
def test_compare_files_validates_before_loading(tmp_path: Path) -> None:
    """Test configuration errors win over missing files."""
    with pytest.raises(ConfigurationError):
        compare_files(tmp_path / "a.bib", tmp_path / "b.bib", strategy="fuzzy")


@pytest.mark.unit
def test_compare_files_missing_destiny(origin_bib: Path, tmp_path: Path) -> None:
    """Test a missing destiny file is reported as such."""
    with pytest.raises(SourceLoadError) as exc_info:
        compare_files(origin_bib, tmp_path / "missing.bib")

    assert exc_info.value.side == "destiny"
    assert exc_info.value.reason == "not_found"


@pytest.mark.unit
def test_compare_files_with_logger(origin_bib: Path, destiny_bib: Path, tmp_path: Path) -> None:
    """Test a logger receives the run events."""
    log_path = tmp_path / "events.jsonl"
    with AuditLogger(log_path) as logger:
        compare_files(origin_bib, destiny_bib, logger=logger)

    events = [json.loads(line)["event"] for line in log_path.read_text().splitlines()]

    assert events[0] == "run_started"
    assert events[-1] == "run_finished"
    assert events.count("source_loaded") == 2


# ---------------------------------------------------------------------------
# write_jsonl
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_write_jsonl(origin_bib: Path, tmp_path: Path) -> None:
    """Test records are written one JSON object per line."""
    records = load_bib(origin_bib)
    output = tmp_path / "records.jsonl"

    write_jsonl(records, output)

    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    first = json.loads(lines[0])
    assert first["key"] == "smith2020"
    assert list(first) == sorted(first)


@pytest.mark.unit
def test_write_jsonl_empty(tmp_path: Path) -> None:
    """Test an empty collection gives an empty file."""
    output = tmp_path / "empty.jsonl"

    write_jsonl([], output)

    assert output.read_text(encoding="utf-8") == ""
