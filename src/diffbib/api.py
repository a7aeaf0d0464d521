"""Public API for comparing bibliographies.

This module provides the main public API for diffbib, enabling:
- Loading BibTeX files into flat records
- Comparing two in-memory collections with a named strategy
- Comparing two files end to end
- Exporting records to JSONL format
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from diffbib.audit import AuditLogger
from diffbib.engine import DiffConfig, run_diff
from diffbib.errors import ConfigurationError, SourceLoadError
from diffbib.matching import DEFAULT_FIELDS_CSV, SIMILARITY_THRESHOLD, DiffResult, invoke
from diffbib.models import BibRecord
from diffbib.parse import ORIGIN, load_source
from diffbib.report import DiffReport

__all__ = [
    "load_bib",
    "compare",
    "compare_files",
    "write_jsonl",
    "ConfigurationError",
    "SourceLoadError",
]


def load_bib(
    path: str | Path,
    *,
    side: str = ORIGIN,
    strict: bool = True,
) -> list[BibRecord]:
    """Load a BibTeX file as flat records.

    Parameters
    ----------
    path : str | Path
        Path to the ``.bib`` file.
    side : str, optional
        Side named in error messages, by default "origin".
    strict : bool, optional
        If True, raise on reader errors. If False, return whatever
        records could be parsed, by default True.

    Returns
    -------
    list[BibRecord]
        Records in file order.

    Raises
    ------
    SourceLoadError
        If the file is missing, unreadable or malformed.

    Examples
    --------
        >>> from diffbib import load_bib
        >>> records = load_bib("references.bib")
        >>> records[0]["key"], records[0].get("TITLE")
    """
    return list(load_source(path, side, strict=strict).records)


def compare(
    origin: Sequence[BibRecord],
    destiny: Sequence[BibRecord],
    *,
    strategy: str = "hash",
    fields: str = DEFAULT_FIELDS_CSV,
    threshold: float = SIMILARITY_THRESHOLD,
) -> DiffResult:
    """Compare two loaded collections.

    Parameters
    ----------
    origin : Sequence[BibRecord]
        First collection.
    destiny : Sequence[BibRecord]
        Second collection.
    strategy : str, optional
        "hash" or "bruteforce", by default "hash".
    fields : str, optional
        Comma-separated field names, by default "key,title".
    threshold : float, optional
        Similarity threshold for "bruteforce", by default 0.3.

    Returns
    -------
    DiffResult
        Three-bucket result.

    Raises
    ------
    ConfigurationError
        If the strategy, field list or threshold is invalid.
    """
    return invoke(strategy, fields, origin, destiny, threshold=threshold)


def compare_files(
    origin_path: str | Path,
    destiny_path: str | Path,
    *,
    strategy: str = "hash",
    fields: str = DEFAULT_FIELDS_CSV,
    threshold: float = SIMILARITY_THRESHOLD,
    strict: bool = True,
    logger: AuditLogger | None = None,
) -> DiffReport:
    """Compare two BibTeX files.

    Configuration is validated before either file is read.

    Parameters
    ----------
    origin_path : str | Path
        First bibliography.
    destiny_path : str | Path
        Second bibliography.
    strategy : str, optional
        "hash" or "bruteforce", by default "hash".
    fields : str, optional
        Comma-separated field names, by default "key,title".
    threshold : float, optional
        Similarity threshold for "bruteforce", by default 0.3.
    strict : bool, optional
        Fail on reader errors, by default True.
    logger : AuditLogger | None, optional
        JSONL audit logger, by default None.

    Returns
    -------
    DiffReport
        Report with counts and key listings.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid.
    SourceLoadError
        If either file cannot be loaded.

    Examples
    --------
        >>> from diffbib import compare_files
        >>> report = compare_files("mine.bib", "theirs.bib", strategy="bruteforce")
        >>> report.result.keys("only_destiny")
    """
    config = DiffConfig(strategy=strategy, fields=fields, threshold=threshold, strict=strict)
    return run_diff(origin_path, destiny_path, config=config, logger=logger)


def write_jsonl(
    records: Sequence[BibRecord],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> None:
    """Write records to JSONL file (one JSON object per line).

    Parameters
    ----------
    records : Sequence[BibRecord]
        Records to write.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort keys for deterministic output, by default True.
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for record in records:
            json_str = json.dumps(dict(record), ensure_ascii=False, sort_keys=sort_keys)
            f.write(json_str + "\n")
