"""
Trace Module.

This package contains the trace registry:
- Trace record lifecycle (start / re-arm / stop)
- Mismatch policies
"""

from trace_registry.core.trace.registry import (
    MISMATCH_OVERWRITE,
    MISMATCH_POLICIES,
    MISMATCH_REJECT,
    TraceRegistry,
)

__all__ = ["TraceRegistry", "MISMATCH_REJECT", "MISMATCH_OVERWRITE", "MISMATCH_POLICIES"]
