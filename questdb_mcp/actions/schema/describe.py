from typing import Any

from questdb_mcp.actions.envelope import ToolResponse, error_message, error_response, json_response
from questdb_mcp.core.context import ActionContext
from questdb_mcp.core.errors import ToolValidationError


async def describe_handler(params: dict[str, Any], context: ActionContext) -> ToolResponse:
    """Get the column layout of a table."""
    table = params.get("table")

    try:
        if not isinstance(table, str) or not table:
            raise ToolValidationError("The 'table' parameter is required for the 'describe_table' tool.")

        result = await context.client.describe_table(table)

    except Exception as e:
        message = error_message(e)
        await context.logger.error(f"Describe table failed: {message}", table=table)
        return error_response(message)

    output = {
        "table": table,
        "columns": result.dataset if result.dataset is not None else result.raw,
    }
    return json_response(result.raw, output)
