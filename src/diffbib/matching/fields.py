"""Comparison field normalization.

Records coming out of :mod:`diffbib.parse.bibtex` store every field name
upper-cased except the citation key. Requested field names are mapped to
the same convention so both strategies look up the right attributes.
"""

from collections.abc import Iterable

from diffbib.errors import ConfigurationError
from diffbib.models import IDENTIFIER_FIELD

__all__ = ["DEFAULT_FIELDS_CSV", "normalize_fields", "parse_fields_csv"]

DEFAULT_FIELDS_CSV = "key,title"


def normalize_fields(fields: Iterable[str]) -> list[str]:
    """Map requested field names to their stored form.

    Parameters
    ----------
    fields : Iterable[str]
        Requested field names, in comparison order.

    Returns
    -------
    list[str]
        Same names in the same order; ``"key"`` verbatim, all others
        upper-cased.

    Examples
    --------
        >>> normalize_fields(["key", "title", "Year"])
        ['key', 'TITLE', 'YEAR']
    """
    return [field if field == IDENTIFIER_FIELD else field.upper() for field in fields]


def parse_fields_csv(fields_csv: str) -> list[str]:
    """Split a comma-separated field list.

    Parameters
    ----------
    fields_csv : str
        Field names separated by commas (e.g. ``"key,title"``).

    Returns
    -------
    list[str]
        Stripped field names in input order (not yet normalized).

    Raises
    ------
    ConfigurationError
        If the list is empty or contains an empty name.
    """
    names = [name.strip() for name in fields_csv.split(",")]

    if not any(names):
        raise ConfigurationError("Field list is empty; expected e.g. 'key,title'")

    if not all(names):
        raise ConfigurationError(f"Field list contains an empty field name: {fields_csv!r}")

    return names
