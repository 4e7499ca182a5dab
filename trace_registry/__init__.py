"""Trace registry: lifecycle bookkeeping for call-budgeted trace sessions."""

from trace_registry.core.trace import TraceRegistry

__all__ = ["TraceRegistry"]

__version__ = "0.1.0"
