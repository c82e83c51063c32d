"""Audit logging subsystem for lfmatch.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: event envelope
"""

from lfmatch.audit.helpers import generate_run_id, get_package_version
from lfmatch.audit.logger import AuditLogger
from lfmatch.audit.models import LOG_LEVELS, LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "LOG_LEVELS",
    "generate_run_id",
    "get_package_version",
]
