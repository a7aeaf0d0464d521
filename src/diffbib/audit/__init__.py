"""Audit logging subsystem for diffbib.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: structured event envelope
"""

from diffbib.audit.helpers import generate_run_id, get_package_version
from diffbib.audit.logger import AuditLogger
from diffbib.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_package_version",
]
