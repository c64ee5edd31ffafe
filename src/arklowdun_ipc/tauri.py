"""Adapter for the real native backend.

The transport itself lives outside this library: callers inject an
``invoker(command, payload)`` callable (sync or async). The adapter applies
the same contract validation and call logging as the fake backend.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from arklowdun_ipc.clock import Clock, SystemClock
from arklowdun_ipc.contracts import get_contract
from arklowdun_ipc.log_buffer import (
    DEFAULT_LOG_SIZE,
    TAURI_ADAPTER_HOOK,
    IpcLogBuffer,
    Timer,
    attach_global_dump,
    finish_quietly,
)
from arklowdun_ipc.models import IpcLogEntry

logger = logging.getLogger("arklowdun_ipc.tauri")

Invoker = Callable[[str, Any], Union[Any, Awaitable[Any]]]


class TauriAdapter:
    adapter_name = "tauri"

    def __init__(
        self,
        invoker: Invoker,
        log_size: int = DEFAULT_LOG_SIZE,
        timer: Optional[Timer] = None,
        clock: Optional[Clock] = None,
        expose_hooks: bool = True,
    ) -> None:
        self._invoker = invoker
        self._log = IpcLogBuffer(
            "tauri", log_size, timer=timer, clock=clock or SystemClock()
        )
        if expose_hooks:
            attach_global_dump(TAURI_ADAPTER_HOOK, self.dump_logs)

    @property
    def log(self) -> IpcLogBuffer:
        return self._log

    def dump_logs(self) -> List[IpcLogEntry]:
        return self._log.dump()

    async def invoke(self, command: str, payload: Any = None) -> Any:
        """Validate, forward to the transport, validate the reply."""
        if payload is None:
            payload = {}
        span = self._log.start(command, payload)
        try:
            contract = get_contract(command)
            parsed = contract.request.parse(payload)
            result = self._invoker(command, parsed)
            if inspect.isawaitable(result):
                result = await result
            response = contract.response.parse(result)
        except BaseException as exc:
            finish_quietly(span, False, exc, logger)
            raise
        finish_quietly(span, True, log=logger)
        return response

    def __repr__(self) -> str:
        return f"TauriAdapter(invoker={self._invoker!r})"
