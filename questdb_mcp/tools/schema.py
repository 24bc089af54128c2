from typing import Annotated

from fastmcp import Context
from fastmcp.tools.tool import ToolResult
from mcp.types import ToolAnnotations
from pydantic import Field

from questdb_mcp.actions.schema.describe import describe_handler
from questdb_mcp.actions.schema.list import list_handler

# Import the mcp server instance to register the tool
from questdb_mcp.app import mcp
from questdb_mcp.dependencies import get_action_context
from questdb_mcp.tools.results import to_tool_result

LIST_TABLES_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "tables": {"type": "array", "items": {"type": "string"}, "description": "List of table names"},
        "count": {"type": "integer", "description": "Number of tables"},
    },
    "required": ["tables", "count"],
}

DESCRIBE_TABLE_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "table": {"type": "string", "description": "The table name"},
        "columns": {"description": "Table column information"},
    },
    "required": ["table"],
}


@mcp.tool(
    name="list_tables",
    description="List all tables in the QuestDB database",
    output_schema=LIST_TABLES_OUTPUT_SCHEMA,
    annotations=ToolAnnotations(title="List QuestDB Tables", readOnlyHint=True),
)
async def list_tables(ctx: Context) -> ToolResult:
    context = get_action_context(ctx)
    response = await list_handler({}, context)
    return to_tool_result(response)


@mcp.tool(
    name="describe_table",
    description="Get the schema of a specific table",
    output_schema=DESCRIBE_TABLE_OUTPUT_SCHEMA,
    annotations=ToolAnnotations(title="Describe QuestDB Table Schema", readOnlyHint=True),
)
async def describe_table(
    table: Annotated[str, Field(description="The name of the table to describe")],
    ctx: Context,
) -> ToolResult:
    context = get_action_context(ctx)
    response = await describe_handler({"table": table}, context)
    return to_tool_result(response)
