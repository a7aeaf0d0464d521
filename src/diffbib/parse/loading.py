"""Load one side of a comparison from a BibTeX file.

Every failure is reported as a :class:`SourceLoadError` that names the
side and one of three reasons:

- ``not_found``: the path does not exist or is not a file
- ``unreadable``: the bytes cannot be read or decoded
- ``malformed``: the content is not BibTeX or the reader reports errors
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from diffbib.errors import SourceLoadError
from diffbib.models import BibRecord
from diffbib.parse.base import detect_encoding, looks_like_bibtex, normalize_line_endings
from diffbib.parse.bibtex import parse_bibtex
from diffbib.utils import calculate_file_digest

__all__ = ["ORIGIN", "DESTINY", "LoadedSource", "load_source"]

ORIGIN = "origin"
DESTINY = "destiny"


@dataclass(frozen=True)
class LoadedSource:
    """Immutable result of loading a single bibliography.

    Attributes
    ----------
    side : str
        "origin" or "destiny".
    path : str
        Path the records were read from.
    records : tuple[BibRecord, ...]
        Parsed records, in file order.
    file_digest : str
        SHA-256 digest of file bytes ("sha256:<hex>").
    encoding : str
        Encoding used to decode the file.
    warnings : tuple[str, ...]
        Reader warnings.
    errors : tuple[str, ...]
        Reader errors tolerated by a lenient load. Content they refer to
        was dropped, so the records are incomplete when this is non-empty.
    """

    side: str
    path: str
    records: tuple[BibRecord, ...]
    file_digest: str
    encoding: str
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def partial(self) -> bool:
        """True if a lenient load skipped content the reader could not parse."""
        return bool(self.errors)

    def describe(self) -> dict[str, Any]:
        """Return path, digest, record count and skipped errors for reports."""
        return {
            "path": self.path,
            "sha256": self.file_digest,
            "records": len(self.records),
            "errors": list(self.errors),
        }


def load_source(path: str | Path, side: str, *, strict: bool = True) -> LoadedSource:
    """Read and parse one BibTeX file.

    Parameters
    ----------
    path : str | Path
        Path to the ``.bib`` file.
    side : str
        Which side this file is ("origin" or "destiny").
    strict : bool, optional
        If True, reader errors (e.g. an unclosed entry) fail the load.
        If False, whatever records could be parsed are returned and the
        errors are kept in ``LoadedSource.errors``, by default True.

    Returns
    -------
    LoadedSource
        Records and file metadata.

    Raises
    ------
    SourceLoadError
        If the file is missing, unreadable or malformed.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise SourceLoadError(
            f"{side} file not found: {file_path}",
            side=side,
            path=str(file_path),
            reason="not_found",
        )

    try:
        file_bytes = file_path.read_bytes()
    except OSError as e:
        raise SourceLoadError(
            f"{side} file could not be read: {e}",
            side=side,
            path=str(file_path),
            reason="unreadable",
        ) from e

    encoding = detect_encoding(file_bytes)
    try:
        content = file_bytes.decode(encoding)
    except UnicodeDecodeError as e:
        raise SourceLoadError(
            f"{side} file could not be decoded with {encoding}: {e}",
            side=side,
            path=str(file_path),
            reason="unreadable",
        ) from e

    content = normalize_line_endings(content)

    if not looks_like_bibtex(content):
        raise SourceLoadError(
            f"{side} file is not a valid bibtex file: {file_path.name}",
            side=side,
            path=str(file_path),
            reason="malformed",
        )

    records, warnings, errors = parse_bibtex(content)

    if errors and strict:
        raise SourceLoadError(
            f"{side} file is not a valid bibtex file: {'; '.join(errors)}",
            side=side,
            path=str(file_path),
            reason="malformed",
        )

    return LoadedSource(
        side=side,
        path=str(file_path),
        records=tuple(records),
        file_digest=calculate_file_digest(file_bytes),
        encoding=encoding,
        warnings=tuple(warnings),
        errors=tuple(errors),
    )
