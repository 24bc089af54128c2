import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from questdb_mcp import __version__
from questdb_mcp.config import load_config
from questdb_mcp.core.client import QuestDBClient
from questdb_mcp.core.context import ActionContext

# --- ARCHITECTURE NOTE ---
# This file defines the specific FastMCP application instance.
# It is separated from server.py to prevent "module shadowing" issues.
#
# When running `python -m questdb_mcp.server`, server.py is loaded as `__main__`.
# If tools import `mcp` from `questdb_mcp.server`, Python loads it AGAIN as a module,
# creating a second `mcp` instance. Tools would register to Instance B, but
# the server runs Instance A (empty).
#
# ALWAYS import `mcp` from `questdb_mcp.app`.
# -------------------------

logger = logging.getLogger(__name__)

INSTRUCTIONS = """QuestDB MCP Server provides tools to interact with QuestDB time-series database.

Available tools:
- query: Execute SELECT queries on QuestDB tables
- insert: Insert data into QuestDB tables using InfluxDB Line Protocol
- list_tables: List all tables in the database
- describe_table: Get the schema of a specific table

The server automatically creates tables and columns when inserting data. All queries are read-only (SELECT only) for safety."""


def build_action_context() -> ActionContext:
    """Wire configuration -> QuestDB client -> ActionContext."""
    config = load_config()
    return ActionContext(client=QuestDBClient(config))


async def shutdown(context: ActionContext) -> None:
    """Drain the sender. Never raises, so process exit is not blocked."""
    logger.info("Shutting down QuestDB MCP server")
    try:
        await context.client.close()
    except Exception:
        logger.exception("Error during shutdown")


# Lifespan context manager for initialization/cleanup
@asynccontextmanager
async def lifespan(server: FastMCP):
    """Create the ActionContext at startup and close the sender on exit."""
    action_context = build_action_context()
    config = action_context.client.config
    logger.info("QuestDB MCP server started (host=%s, port=%s)", config.host, config.port)

    try:
        yield {"action_context": action_context}
    finally:
        await shutdown(action_context)


mcp = FastMCP(
    name="questdb-mcp",
    version=__version__,
    instructions=INSTRUCTIONS,
    lifespan=lifespan,
)


# Health endpoint
@mcp.custom_route("/health", methods=["GET"])
async def health(request):
    """Returns the health status of the server."""
    from starlette.responses import JSONResponse

    return JSONResponse({"status": "ok"})
