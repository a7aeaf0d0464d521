"""BibTeX reading.

Main entry points:
- load_source: read one side of a comparison from a .bib file
- parse_bibtex: parse BibTeX text already in memory
"""

from diffbib.parse.base import ParseResult
from diffbib.parse.bibtex import parse_bibtex
from diffbib.parse.loading import DESTINY, ORIGIN, LoadedSource, load_source

__all__ = [
    "ORIGIN",
    "DESTINY",
    "LoadedSource",
    "ParseResult",
    "load_source",
    "parse_bibtex",
]
