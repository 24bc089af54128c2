from typing import Any

from questdb_mcp.actions.envelope import ToolResponse, error_message, error_response, json_response, text_response
from questdb_mcp.core.client import QueryResult
from questdb_mcp.core.context import ActionContext
from questdb_mcp.core.errors import ToolValidationError


async def query_handler(params: dict[str, Any], context: ActionContext) -> ToolResponse:
    """Handles the 'query' tool: runs a SELECT and shapes the result."""
    query = params.get("query")
    format = params.get("format") or "json"

    try:
        if not isinstance(query, str) or not query.strip():
            raise ToolValidationError("The 'query' parameter is required.")

        result = await context.client.query(query, format)

        if isinstance(result, QueryResult):
            structured = {
                "query": query,
                "dataset": result.dataset if result.dataset is not None else [],
                "count": result.count,
                "columns": result.columns,
            }
            return json_response(result.raw, structured)

        return text_response(result, {"query": query})

    except Exception as e:
        message = error_message(e)
        await context.logger.error(f"Query failed: {message}", query=query)
        return error_response(message)
