"""Base types and utilities for the BibTeX reader."""

import re
from typing import NamedTuple

from diffbib.models import BibRecord

ENTRY_PATTERN = re.compile(r"^\s*@\w+\s*[{(]", re.MULTILINE)


class ParseResult(NamedTuple):
    """Result of parsing a bibliography.

    Supports tuple unpacking: ``records, warnings, errors = parse_bibtex(...)``.

    Attributes
    ----------
    records : list[BibRecord]
        Parsed records, in file order.
    warnings : list[str]
        Warning messages (skipped or recoverable content).
    errors : list[str]
        Error messages (content that could not be parsed).
    """

    records: list[BibRecord]
    warnings: list[str]
    errors: list[str]


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF."""
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")


def looks_like_bibtex(content: str) -> bool:
    """Return True if *content* is blank or contains at least one ``@type{`` entry.

    Blank content is an empty bibliography, not a format error.
    """
    if not content.strip():
        return True
    return ENTRY_PATTERN.search(content) is not None
