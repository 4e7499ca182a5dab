"""Registry error taxonomy."""

from __future__ import annotations

from typing import Any, Hashable


class TraceRegistryError(Exception):
    """Base class for all registry errors."""


class UnknownTraceError(TraceRegistryError, KeyError):
    """Raised when an operation names a trace the registry has never seen."""

    def __init__(self, trace_id: Hashable):
        super().__init__(f"Unknown trace: {trace_id!r}")
        self.trace_id = trace_id

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0])


class TraceConfigMismatchError(TraceRegistryError, ValueError):
    """Raised when a stopped trace is restarted with a different budget or options."""

    def __init__(
        self,
        trace_id: Hashable,
        stored: tuple[int, Any],
        requested: tuple[int, Any],
    ):
        super().__init__(
            f"Trace {trace_id!r} was created with max_calls={stored[0]!r}, "
            f"options={stored[1]!r}; got max_calls={requested[0]!r}, options={requested[1]!r}"
        )
        self.trace_id = trace_id
        self.stored = stored
        self.requested = requested


class UnsupportedRequestError(TraceRegistryError, TypeError):
    """Raised when handle_request receives something outside the operation set."""

    def __init__(self, request: Any):
        super().__init__(f"Unsupported registry request: {type(request).__name__}")
        self.request = request
