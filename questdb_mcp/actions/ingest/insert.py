from collections.abc import Mapping
from typing import Any

from questdb_mcp.actions.envelope import ToolResponse, error_message, error_response, text_response
from questdb_mcp.core.context import ActionContext
from questdb_mcp.core.errors import ToolValidationError


async def insert_handler(params: dict[str, Any], context: ActionContext) -> ToolResponse:
    """Handles the 'insert' tool: writes one row via the line protocol."""
    table = params.get("table")
    data = params.get("data")

    try:
        if not isinstance(table, str) or not table.strip():
            raise ToolValidationError("The 'table' parameter is required for the 'insert' tool.")
        if not isinstance(data, Mapping):
            raise ToolValidationError("The 'data' parameter must be an object of column names to values.")

        await context.client.insert(table, dict(data))

    except Exception as e:
        message = error_message(e)
        await context.logger.error(f"Insert failed: {message}", table=table)
        return error_response(message)

    output = {
        "success": True,
        "table": table,
        "message": f"Successfully inserted data into table '{table}'",
    }
    await context.logger.info(f"Inserted data into table '{table}'")
    return text_response(output["message"], output)
