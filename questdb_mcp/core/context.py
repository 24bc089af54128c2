from dataclasses import dataclass, field, replace

from questdb_mcp.core.client import QuestDBClient
from questdb_mcp.core.logger import LogSink, StreamLogSink


@dataclass(frozen=True)
class ActionContext:
    """What every action handler needs: the QuestDB client and a log sink."""

    client: QuestDBClient
    logger: LogSink = field(default_factory=StreamLogSink)

    def with_logger(self, logger: LogSink) -> "ActionContext":
        return replace(self, logger=logger)
