"""
Core Layer - registry state machine and its contracts.

This package contains:
- Configuration management (settings.py)
- Core data types (types.py) - records, outcomes and requests
- Error taxonomy (errors.py)
- Trace registry (trace/)
"""

from trace_registry.core.errors import (
    TraceConfigMismatchError,
    TraceRegistryError,
    UnknownTraceError,
    UnsupportedRequestError,
)
from trace_registry.core.types import (
    EndTrace,
    Started,
    StartTraceRequest,
    Stopped,
    StopTraceRequest,
    TraceRecord,
)

__all__ = [
    "TraceRecord",
    "Started",
    "EndTrace",
    "Stopped",
    "StartTraceRequest",
    "StopTraceRequest",
    "TraceRegistryError",
    "UnknownTraceError",
    "TraceConfigMismatchError",
    "UnsupportedRequestError",
]
