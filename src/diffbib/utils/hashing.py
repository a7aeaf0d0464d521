"""Hashing utilities for diffbib.

Record fingerprints use the bare hex digest; file digests reported to
users carry a ``sha256:`` prefix.
"""

import hashlib

__all__ = [
    "format_sha256",
    "calculate_file_digest",
    "sha256_hex",
]


def format_sha256(hex_digest: str) -> str:
    """Format SHA256 hash with standard prefix.

    Parameters
    ----------
    hex_digest : str
        Raw hexadecimal digest.

    Returns
    -------
    str
        Formatted hash with "sha256:" prefix.
    """
    return f"sha256:{hex_digest}"


def calculate_file_digest(file_bytes: bytes) -> str:
    """Calculate SHA-256 digest of file bytes.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        SHA-256 digest in format "sha256:<hex>".
    """
    return format_sha256(hashlib.sha256(file_bytes).hexdigest())


def sha256_hex(text: str) -> str:
    """Return the 64-character hex SHA-256 digest of UTF-8 *text*."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
