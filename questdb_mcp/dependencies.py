"""Lifespan lookups shared by the tool registrations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from questdb_mcp.core.logger import select_sink

if TYPE_CHECKING:
    from fastmcp import Context

    from questdb_mcp.core.context import ActionContext


def get_action_context(ctx: Context) -> ActionContext:
    """Get the ActionContext for the current tool call.

    The lifespan in `questdb_mcp.app` stores one ActionContext per server
    session. The returned copy logs through the session of this request.

    Raises:
        RuntimeError: If the lifespan has not provided an ActionContext.

    Example:
        ```python
        @mcp.tool()
        async def my_tool(table: str, ctx: Context) -> ToolResult:
            context = get_action_context(ctx)
            result = await context.client.describe_table(table)
            ...
        ```
    """
    lifespan_context = ctx.request_context.lifespan_context

    if lifespan_context is None:
        raise RuntimeError("Lifespan context not available. Server lifespan may not have completed.")

    action_context = lifespan_context.get("action_context")
    if action_context is None:
        raise RuntimeError(
            "ActionContext not found in lifespan. Ensure the lifespan context manager sets action_context."
        )

    return action_context.with_logger(select_sink(ctx))
