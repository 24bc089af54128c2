from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from questdb_mcp.actions.envelope import ToolResponse, is_error, response_text


def to_tool_result(response: ToolResponse) -> ToolResult:
    """Convert a handler envelope into what FastMCP sends back.

    Error envelopes are raised as ToolError; the MCP server turns that into a
    result with `isError: true` and the envelope text.
    """
    if is_error(response):
        raise ToolError(response_text(response))

    return ToolResult(
        content=[TextContent(type="text", text=item["text"]) for item in response["content"]],
        structured_content=response.get("structuredContent"),
    )
