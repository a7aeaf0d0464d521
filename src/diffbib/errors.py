"""Exception types raised by diffbib.

All errors derive from :class:`DiffbibError` so callers can catch the
whole family at the API boundary.
"""

from __future__ import annotations

__all__ = [
    "DiffbibError",
    "ConfigurationError",
    "SourceLoadError",
    "ComparisonCancelledError",
]


class DiffbibError(Exception):
    """Base class for all diffbib errors."""


class ConfigurationError(DiffbibError, ValueError):
    """Raised when a comparison is configured incorrectly.

    Covers unknown strategy names, empty or invalid field lists and
    out-of-range thresholds. Always raised before any record is compared.
    """


class SourceLoadError(DiffbibError):
    """Raised when one side of a comparison cannot be loaded.

    Parameters
    ----------
    message : str
        Error message.
    side : str
        Which input failed ("origin" or "destiny").
    path : str | None, optional
        Path of the failing input.
    reason : str, optional
        One of "not_found", "unreadable" or "malformed", by default "malformed".
    """

    def __init__(
        self,
        message: str,
        side: str,
        path: str | None = None,
        reason: str = "malformed",
    ) -> None:
        super().__init__(message)
        self.side = side
        self.path = path
        self.reason = reason


class ComparisonCancelledError(DiffbibError):
    """Raised when a cooperative stop hook asks a running match to abort."""
