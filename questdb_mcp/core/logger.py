"""
Best-effort logging for tool handlers.

When a tool call is running there is a connected MCP session, and log entries
go to the client as `notifications/message`. Outside a request (startup,
shutdown, tests) they go to the local `questdb_mcp` logger, which writes to
stderr. Neither sink raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Protocol

if TYPE_CHECKING:
    from fastmcp import Context

LOGGER_NAME = "questdb_mcp"


class LogSink(Protocol):
    async def info(self, message: str, **metadata: Any) -> None: ...

    async def error(self, message: str, **metadata: Any) -> None: ...


class StreamLogSink:
    """Writes to a stdlib logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    def emit(self, level: int, message: str, metadata: dict[str, Any]) -> None:
        if metadata:
            self._logger.log(level, "%s %s", message, metadata)
        else:
            self._logger.log(level, "%s", message)

    async def info(self, message: str, **metadata: Any) -> None:
        self.emit(logging.INFO, message, metadata)

    async def error(self, message: str, **metadata: Any) -> None:
        self.emit(logging.ERROR, message, metadata)


class ProtocolLogSink:
    """Sends log entries to the MCP client of the current request."""

    def __init__(self, ctx: Context, fallback: Optional[StreamLogSink] = None):
        self._ctx = ctx
        self._fallback = fallback or StreamLogSink()

    async def _send(self, level: str, stdlib_level: int, message: str, metadata: dict[str, Any]) -> None:
        try:
            await self._ctx.session.send_log_message(
                level=level,
                data={"message": message, **metadata},
                logger=LOGGER_NAME,
                related_request_id=self._ctx.request_id,
            )
        except Exception:
            self._fallback.emit(stdlib_level, message, metadata)

    async def info(self, message: str, **metadata: Any) -> None:
        await self._send("info", logging.INFO, message, metadata)

    async def error(self, message: str, **metadata: Any) -> None:
        await self._send("error", logging.ERROR, message, metadata)


def select_sink(ctx: Optional[Context]) -> LogSink:
    """Pick the protocol channel when a request context exists, else stderr."""
    if ctx is None:
        return StreamLogSink()
    return ProtocolLogSink(ctx)
