"""Bounded, order-preserving record of IPC call attempts.

Each adapter owns one :class:`IpcLogBuffer`. A call opens a :class:`LogSpan`
before any validation happens and closes it exactly once with the outcome.
Once ``limit`` entries are held the oldest is evicted first.

Opening a span never raises: payload keys that cannot be read are reported
as ``[]``, and a failing timer or clock falls back to the wall clock.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Mapping
from functools import singledispatch
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from pydantic import BaseModel

from arklowdun_ipc.clock import Clock, SystemClock, iso_timestamp
from arklowdun_ipc.models import AdapterName, IpcLogEntry

logger = logging.getLogger("arklowdun_ipc.log_buffer")

DEFAULT_LOG_SIZE = 200

TEST_ADAPTER_HOOK = "__ARKLOWDUN_TEST_ADAPTER__"
TAURI_ADAPTER_HOOK = "__ARKLOWDUN_TAURI_ADAPTER__"

Timer = Callable[[], float]

# Process-wide introspection hooks, keyed by adapter hook name.
_GLOBAL_HOOKS: Dict[str, Dict[str, Callable[..., Any]]] = {}
_HOOKS_LOCK = threading.Lock()


def _perf_ms() -> float:
    return time.perf_counter() * 1000.0


@singledispatch
def payload_keys_of(payload: Any) -> List[str]:
    """Sorted, de-duplicated top-level field names of *payload*.

    Payloads that are not objects, or whose keys cannot be enumerated, report
    no keys. Register an implementation for custom payload types with
    ``payload_keys_of.register``.
    """
    return []


@payload_keys_of.register(Mapping)
def _mapping_keys(payload: Mapping) -> List[str]:  # type: ignore[type-arg]
    try:
        return sorted({str(key) for key in payload})
    except Exception:
        logger.debug("Could not enumerate payload keys", exc_info=True)
        return []


@payload_keys_of.register(BaseModel)
def _model_keys(payload: BaseModel) -> List[str]:
    try:
        return sorted(payload.model_dump(exclude_unset=True))
    except Exception:
        logger.debug("Could not enumerate payload keys", exc_info=True)
        return []


def _describe_error(error: Optional[BaseException | str]) -> str:
    if error is None:
        return "unknown error"
    message = str(error)
    if message:
        return message
    if isinstance(error, BaseException):
        return type(error).__name__
    return "unknown error"


class LogSpan:
    """An open call attempt; :meth:`finish` records it."""

    def __init__(
        self,
        buffer: "IpcLogBuffer",
        command: str,
        payload_keys: Tuple[str, ...],
        started: float,
        timestamp: str,
    ) -> None:
        self._buffer = buffer
        self.command = command
        self.payload_keys = payload_keys
        self.started = started
        self.timestamp = timestamp
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def finish(
        self, success: bool, error: Optional[BaseException | str] = None
    ) -> Optional[IpcLogEntry]:
        """Close the span and append its entry.

        A span records at most once; later calls are ignored and return
        ``None``.
        """
        if self._finished:
            logger.debug("Span for %s already finished", self.command)
            return None
        self._finished = True
        try:
            elapsed = max(self._buffer.timer() - self.started, 0.0)
        except Exception:
            logger.debug("Timer failed for %s", self.command, exc_info=True)
            elapsed = 0.0
        entry = IpcLogEntry(
            adapter=self._buffer.adapter,
            command=self.command,
            payload_keys=self.payload_keys,
            success=success,
            duration_ms=round(elapsed, 2),
            timestamp=self.timestamp,
            error=None if success else _describe_error(error),
        )
        self._buffer.record(entry)
        return entry


class IpcLogBuffer:
    """Fixed-capacity FIFO of :class:`IpcLogEntry`.

    Entry timestamps come from *clock*, the wall clock unless another is
    given. Adapters keep their virtual clock for handlers, so recorded
    timestamps are real call times.
    """

    def __init__(
        self,
        adapter: AdapterName,
        limit: int = DEFAULT_LOG_SIZE,
        timer: Optional[Timer] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self.adapter: AdapterName = adapter
        self.limit = limit
        self.timer: Timer = timer or _perf_ms
        self.clock: Clock = clock or SystemClock()
        self._entries: Deque[IpcLogEntry] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def start(self, command: str, payload: Any) -> LogSpan:
        """Open a span, capturing timing and payload keys up front."""
        try:
            keys = tuple(payload_keys_of(payload))
        except Exception:
            logger.debug("Payload keys unavailable for %s", command, exc_info=True)
            keys = ()
        try:
            started = self.timer()
        except Exception:
            logger.debug("Timer failed for %s", command, exc_info=True)
            started = _perf_ms()
        try:
            timestamp = iso_timestamp(self.clock.now())
        except Exception:
            logger.debug("Clock failed for %s", command, exc_info=True)
            timestamp = iso_timestamp(SystemClock().now())
        return LogSpan(self, command, keys, started=started, timestamp=timestamp)

    def record(self, entry: IpcLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def dump(self) -> List[IpcLogEntry]:
        """Snapshot of the buffer, oldest first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"IpcLogBuffer({self.adapter!r}, {len(self)}/{self.limit})"


def attach_global_hook(key: str, **entries: Callable[..., Any]) -> None:
    """Merge *entries* into the introspection hook stored under *key*."""
    with _HOOKS_LOCK:
        existing = _GLOBAL_HOOKS.get(key, {})
        _GLOBAL_HOOKS[key] = {**existing, **entries}


def attach_global_dump(key: str, dump: Callable[[], List[IpcLogEntry]]) -> None:
    """Expose ``dump_logs`` under *key*, keeping any other hook entries."""
    attach_global_hook(key, dump_logs=dump)


def global_hook(key: str) -> Dict[str, Callable[..., Any]]:
    """Copy of the hook stored under *key* (empty when absent)."""
    with _HOOKS_LOCK:
        return dict(_GLOBAL_HOOKS.get(key, {}))


def detach_global_hook(key: str) -> None:
    with _HOOKS_LOCK:
        _GLOBAL_HOOKS.pop(key, None)


def finish_quietly(
    span: LogSpan,
    success: bool,
    error: Optional[BaseException] = None,
    log: logging.Logger = logger,
) -> None:
    """Close *span*, reporting (not raising) any failure to record it."""
    try:
        span.finish(success, error)
    except Exception:
        log.warning("Failed to record IPC log entry for %s", span.command, exc_info=True)
