from typing import Annotated, Any

from fastmcp import Context
from fastmcp.tools.tool import ToolResult
from mcp.types import ToolAnnotations
from pydantic import Field

from questdb_mcp.actions.ingest.insert import insert_handler

# Import the mcp server instance to register the tool
from questdb_mcp.app import mcp
from questdb_mcp.dependencies import get_action_context
from questdb_mcp.tools.results import to_tool_result

INSERT_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "success": {"type": "boolean", "description": "Whether the insert was successful"},
        "table": {"type": "string", "description": "The table name"},
        "message": {"type": "string", "description": "Status message"},
    },
    "required": ["success", "table", "message"],
}


@mcp.tool(
    name="insert",
    description=(
        "Insert data into a QuestDB table using the InfluxDB Line Protocol. "
        "Automatically creates tables and columns if they don't exist."
    ),
    output_schema=INSERT_OUTPUT_SCHEMA,
    annotations=ToolAnnotations(title="Insert Data into QuestDB", readOnlyHint=False),
)
async def insert(
    table: Annotated[str, Field(description="The name of the table to insert into")],
    data: Annotated[
        dict[str, Any],
        Field(
            description=(
                "An object containing the data to insert. Keys are column names, values are the data. "
                "Use 'timestamp' key for explicit timestamp (milliseconds since epoch)."
            )
        ),
    ],
    ctx: Context,
) -> ToolResult:
    context = get_action_context(ctx)
    response = await insert_handler({"table": table, "data": data}, context)
    return to_tool_result(response)
