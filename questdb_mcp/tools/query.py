from typing import Annotated

from fastmcp import Context
from fastmcp.tools.tool import ToolResult
from mcp.types import ToolAnnotations
from pydantic import Field

from questdb_mcp.actions.query.read import query_handler

# Import the mcp server instance to register the tool
from questdb_mcp.app import mcp
from questdb_mcp.core.client import QueryFormat
from questdb_mcp.dependencies import get_action_context
from questdb_mcp.tools.results import to_tool_result

QUERY_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "dataset": {"type": "array", "description": "Query result dataset (for JSON format)"},
        "query": {"type": "string", "description": "The executed query"},
        "count": {"type": "integer", "description": "Number of rows returned"},
        "columns": {"type": "array", "items": {"type": "string"}, "description": "Column names"},
    },
}


@mcp.tool(
    name="query",
    description=(
        "Execute a SQL query on QuestDB and return the results. Supports SELECT queries only for safety."
    ),
    output_schema=QUERY_OUTPUT_SCHEMA,
    annotations=ToolAnnotations(title="Query QuestDB", readOnlyHint=True),
)
async def query(
    query: Annotated[str, Field(description="The SQL query to execute (SELECT queries only)")],
    ctx: Context,
    format: Annotated[QueryFormat, Field(description="Output format for the query results")] = "json",
) -> ToolResult:
    context = get_action_context(ctx)
    response = await query_handler({"query": query, "format": format}, context)
    return to_tool_result(response)
