"""QuestDB MCP server: query and ingest QuestDB data over the Model Context Protocol."""

from questdb_mcp.config import ConnectionDescriptor, load_config
from questdb_mcp.core.client import QueryResult, QuestDBClient
from questdb_mcp.core.logger import LogSink, ProtocolLogSink, StreamLogSink

__version__ = "1.0.0"

__all__ = [
    "ConnectionDescriptor",
    "LogSink",
    "ProtocolLogSink",
    "QueryResult",
    "QuestDBClient",
    "StreamLogSink",
    "__version__",
    "load_config",
]
