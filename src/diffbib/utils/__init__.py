"""Common utility functions for diffbib."""

from diffbib.utils.hashing import calculate_file_digest, format_sha256, sha256_hex
from diffbib.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_digest",
    "format_sha256",
    "sha256_hex",
]
