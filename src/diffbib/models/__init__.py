"""Shared data types for diffbib.

Matching result types live closer to their producers in
:mod:`diffbib.matching.models`.
"""

from diffbib.models.records import (
    ENTRY_TYPE_FIELD,
    IDENTIFIER_FIELD,
    BibRecord,
    freeze_record,
    record_key,
)

__all__ = [
    "BibRecord",
    "IDENTIFIER_FIELD",
    "ENTRY_TYPE_FIELD",
    "freeze_record",
    "record_key",
]
