"""In-process registry for the lifecycle of named trace sessions.

A tracing caller asks the registry before each invocation of a traced
function whether to proceed (`Started`) or to finalize its report
(`EndTrace`), and tells it when the invocation finished (`Stopped`).

Every read and mutation of the record map happens under one lock, so the
check-then-mutate sequences below are atomic with respect to each other.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Hashable, Optional

from trace_registry.core.errors import (
    TraceConfigMismatchError,
    UnknownTraceError,
    UnsupportedRequestError,
)
from trace_registry.core.types import (
    EndTrace,
    StartOutcome,
    Started,
    StartTraceRequest,
    Stopped,
    StopTraceRequest,
    TraceOutcome,
    TraceRecord,
    TraceRequest,
    validate_max_calls,
)
from trace_registry.observability.logger import get_logger

MISMATCH_REJECT = "reject"
MISMATCH_OVERWRITE = "overwrite"
MISMATCH_POLICIES = (MISMATCH_REJECT, MISMATCH_OVERWRITE)


class TraceRegistry:
    """Serialized key-value store of trace records.

    Args:
        on_config_mismatch: What to do when a stopped trace is restarted with
            a different `max_calls`/`options`. `reject` raises
            TraceConfigMismatchError; `overwrite` re-arms the trace with the
            new values and a zeroed call count.
        logger: Optional logger; defaults to the `trace-registry` logger.
    """

    def __init__(
        self,
        on_config_mismatch: str = MISMATCH_REJECT,
        logger: Optional[logging.Logger] = None,
    ):
        if on_config_mismatch not in MISMATCH_POLICIES:
            raise ValueError(
                f"Unsupported mismatch policy: '{on_config_mismatch}'. "
                f"Available policies: {', '.join(MISMATCH_POLICIES)}"
            )
        self.on_config_mismatch = on_config_mismatch
        self.logger = logger or get_logger("trace-registry")
        self._lock = threading.Lock()
        self._traces: dict[Hashable, TraceRecord] = {}

    @classmethod
    def from_settings(cls, settings: Any, logger: Optional[logging.Logger] = None) -> "TraceRegistry":
        registry_settings = getattr(settings, "registry", None)
        policy = getattr(registry_settings, "on_config_mismatch", MISMATCH_REJECT)
        return cls(on_config_mismatch=policy, logger=logger)

    def start_trace(self, trace_id: Hashable, max_calls: int, options: Any = None) -> StartOutcome:
        """Create, re-arm or acknowledge the trace `trace_id`.

        Returns:
            EndTrace when this call brings the count to `max_calls`,
            Started otherwise.

        Raises:
            ValueError: max_calls is not a positive integer.
            TraceConfigMismatchError: the trace is stopped, was created with a
                different budget or options, and the policy is `reject`.
        """
        validate_max_calls(max_calls)

        with self._lock:
            trace = self._traces.get(trace_id)

            if trace is None:
                self._traces[trace_id] = TraceRecord(
                    trace_id=trace_id,
                    max_calls=max_calls,
                    calls=0,
                    running=True,
                    options=options,
                )
                self.logger.debug("Trace %r created (max_calls=%d)", trace_id, max_calls)
                return Started(trace_id)

            if trace.running:
                self.logger.debug("Trace %r already running (calls=%d)", trace_id, trace.calls)
                return Started(trace_id)

            if not trace.matches(max_calls, options):
                return self._handle_mismatch(trace, max_calls, options)

            new_calls = trace.calls + 1
            self._traces[trace_id] = replace(trace, calls=new_calls, running=True)

            if new_calls == trace.max_calls:
                self.logger.info("Trace %r reached max_calls=%d", trace_id, trace.max_calls)
                return EndTrace(trace_id, calls=new_calls, options=trace.options)

            self.logger.debug(
                "Trace %r re-armed (calls=%d/%d)", trace_id, new_calls, trace.max_calls
            )
            return Started(trace_id)

    def _handle_mismatch(self, trace: TraceRecord, max_calls: int, options: Any) -> Started:
        # Caller holds the lock.
        if self.on_config_mismatch == MISMATCH_REJECT:
            self.logger.warning(
                "Trace %r restarted with different configuration; rejected", trace.trace_id
            )
            raise TraceConfigMismatchError(
                trace.trace_id,
                stored=(trace.max_calls, trace.options),
                requested=(max_calls, options),
            )

        self.logger.warning(
            "Trace %r restarted with different configuration; overwriting (max_calls=%d)",
            trace.trace_id,
            max_calls,
        )
        self._traces[trace.trace_id] = TraceRecord(
            trace_id=trace.trace_id,
            max_calls=max_calls,
            calls=0,
            running=True,
            options=options,
        )
        return Started(trace.trace_id)

    def stop_trace(self, trace_id: Hashable) -> Stopped:
        """Mark the trace as not running; idempotent for stopped traces.

        Raises:
            UnknownTraceError: no trace exists for `trace_id`.
        """
        with self._lock:
            trace = self._traces.get(trace_id)
            if trace is None:
                self.logger.warning("Stop requested for unknown trace %r", trace_id)
                raise UnknownTraceError(trace_id)

            if trace.running:
                self._traces[trace_id] = replace(trace, running=False)
                self.logger.debug("Trace %r stopped (calls=%d)", trace_id, trace.calls)

            return Stopped(trace_id, calls=trace.calls, options=trace.options)

    def handle_request(self, request: TraceRequest) -> TraceOutcome:
        if isinstance(request, StartTraceRequest):
            return self.start_trace(request.trace_id, request.max_calls, request.options)
        if isinstance(request, StopTraceRequest):
            return self.stop_trace(request.trace_id)
        raise UnsupportedRequestError(request)

    def get_trace(self, trace_id: Hashable) -> TraceRecord:
        with self._lock:
            trace = self._traces.get(trace_id)
        if trace is None:
            raise UnknownTraceError(trace_id)
        return trace

    def list_traces(self) -> list[TraceRecord]:
        with self._lock:
            return list(self._traces.values())

    def remove_trace(self, trace_id: Hashable) -> TraceRecord:
        """Drop a trace record and return its last state."""
        with self._lock:
            trace = self._traces.pop(trace_id, None)
        if trace is None:
            raise UnknownTraceError(trace_id)
        self.logger.info("Trace %r removed (calls=%d)", trace_id, trace.calls)
        return trace

    def __len__(self) -> int:
        with self._lock:
            return len(self._traces)

    def __contains__(self, trace_id: object) -> bool:
        with self._lock:
            return trace_id in self._traces
