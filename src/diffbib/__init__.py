"""Detect drift between two BibTeX bibliographies.

This package provides:
- Data models (diffbib.models) - flat bibliographic records
- Parsing (diffbib.parse) - BibTeX reading and source loading
- Matching (diffbib.matching) - hash and bruteforce strategies
- Engine (diffbib.engine) - load-then-compare pipeline
- Report (diffbib.report) - text and JSON renderings
- Audit (diffbib.audit) - JSONL event logging
- CLI (diffbib.cli) - command-line interface
- Public API (diffbib.api) - high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from diffbib.api import compare, compare_files, load_bib, write_jsonl
from diffbib.errors import (
    ComparisonCancelledError,
    ConfigurationError,
    DiffbibError,
    SourceLoadError,
)
from diffbib.matching import DiffResult, Strategy, invoke
from diffbib.models import BibRecord
from diffbib.report import DiffReport

__all__ = [
    "__version__",
    "__license__",
    "BibRecord",
    "DiffResult",
    "DiffReport",
    "Strategy",
    "invoke",
    "load_bib",
    "compare",
    "compare_files",
    "write_jsonl",
    "DiffbibError",
    "ConfigurationError",
    "SourceLoadError",
    "ComparisonCancelledError",
]
