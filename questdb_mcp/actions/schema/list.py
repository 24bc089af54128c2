from typing import Any

from questdb_mcp.actions.envelope import ToolResponse, error_message, error_response, json_response
from questdb_mcp.core.context import ActionContext


async def list_handler(params: dict[str, Any], context: ActionContext) -> ToolResponse:
    """List tables in the database."""
    try:
        tables = await context.client.list_tables()
    except Exception as e:
        message = error_message(e)
        await context.logger.error(f"List tables failed: {message}")
        return error_response(message)

    output = {"tables": tables, "count": len(tables)}
    return json_response(output, output)
