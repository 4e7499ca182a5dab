"""Core data types for the trace registry.

These types are shared by the registry, the CLI and the tests.

Rules:
- every type is immutable; the registry replaces records by value
- `options` is opaque and carried through unchanged
- types are JSON-friendly via to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Union


def validate_max_calls(max_calls: Any) -> None:
    if isinstance(max_calls, bool) or not isinstance(max_calls, int):
        raise ValueError(f"max_calls must be an int, got {type(max_calls).__name__}")
    if max_calls <= 0:
        raise ValueError("max_calls must be a positive integer")


@dataclass(frozen=True)
class TraceRecord:
    """State the registry keeps for a single trace.

    Attributes:
        trace_id: Caller-supplied identifier (any hashable value)
        max_calls: Budget; reaching it emits an EndTrace outcome
        calls: Number of re-armed invocations counted so far
        running: True while an invocation is in flight
        options: Opaque caller configuration, never inspected
    """

    trace_id: Hashable
    max_calls: int
    calls: int = 0
    running: bool = True
    options: Any = None

    def __post_init__(self) -> None:
        validate_max_calls(self.max_calls)

    def matches(self, max_calls: int, options: Any) -> bool:
        """Return True if the stored budget and options equal the given ones."""
        return self.max_calls == max_calls and self.options == options

    def to_dict(self) -> dict[str, Any]:
        return {
            "trace_id": self.trace_id,
            "max_calls": self.max_calls,
            "calls": self.calls,
            "running": self.running,
            "options": self.options,
        }


@dataclass(frozen=True)
class Started:
    """The trace is (still) in progress; the caller should proceed."""

    trace_id: Hashable

    def to_dict(self) -> dict[str, Any]:
        return {"outcome": "started", "trace_id": self.trace_id}


@dataclass(frozen=True)
class EndTrace:
    """The call budget is exhausted; the caller should finalize and report."""

    trace_id: Hashable
    calls: int
    options: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": "end_trace",
            "trace_id": self.trace_id,
            "calls": self.calls,
            "options": self.options,
        }


@dataclass(frozen=True)
class Stopped:
    trace_id: Hashable
    calls: int
    options: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": "stopped",
            "trace_id": self.trace_id,
            "calls": self.calls,
            "options": self.options,
        }


@dataclass(frozen=True)
class StartTraceRequest:
    trace_id: Hashable
    max_calls: int
    options: Any = None

    def __post_init__(self) -> None:
        validate_max_calls(self.max_calls)


@dataclass(frozen=True)
class StopTraceRequest:
    trace_id: Hashable


TraceRequest = Union[StartTraceRequest, StopTraceRequest]
StartOutcome = Union[Started, EndTrace]
TraceOutcome = Union[Started, EndTrace, Stopped]
