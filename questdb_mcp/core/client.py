"""QuestDB adapter: SQL reads over HTTP, writes over the line protocol."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional, Union, cast

import httpx
from questdb.ingress import IngressError, Sender, TimestampNanos

from questdb_mcp.config import ConnectionDescriptor
from questdb_mcp.core.columns import TIMESTAMP_KEY, split_fields, to_epoch_millis
from questdb_mcp.core.errors import QueryExecutionError, ToolValidationError, TransportError
from questdb_mcp.security.access_control import require_identifier, require_select

logger = logging.getLogger(__name__)

QueryFormat = Literal["json", "csv"]
QUERY_FORMATS = ("json", "csv")

LIST_TABLES_SQL = "SELECT table_name FROM tables() ORDER BY table_name"
DESCRIBE_TABLE_SQL = "SELECT * FROM table_columns('{table}')"


@dataclass
class QueryResult:
    """Parsed body of a JSON response from /exec."""

    query: str
    columns: list[str] = field(default_factory=list)
    column_types: list[str] = field(default_factory=list)
    dataset: Optional[list[Any]] = None
    count: int = 0
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, query: str, body: Any) -> "QueryResult":
        if not isinstance(body, dict):
            return cls(query=query, raw={"result": body})

        names: list[str] = []
        types: list[str] = []
        for column in body.get("columns") or []:
            if isinstance(column, dict):
                names.append(str(column.get("name")))
                types.append(str(column.get("type", "")))
            else:
                names.append(str(column))

        dataset = body.get("dataset")
        if not isinstance(dataset, list):
            dataset = None

        count = body.get("count")
        if not isinstance(count, int) or isinstance(count, bool):
            count = len(dataset) if dataset is not None else 0

        return cls(
            query=body.get("query") or query,
            columns=names,
            column_types=types,
            dataset=dataset,
            count=count,
            raw=body,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "columns": self.columns,
            "dataset": self.dataset if self.dataset is not None else [],
            "count": self.count,
        }


SenderFactory = Callable[[str], Sender]


class QuestDBClient:
    """
    Single seam between the tools and QuestDB.

    Reads use a fresh httpx client per call. Writes share one line-protocol
    sender, created on the first insert and dropped again by close().

    The sender is a blocking client, so every call into it runs in a worker
    thread while holding `_sender_lock`; at most one thread touches it at a time.
    """

    def __init__(
        self,
        config: ConnectionDescriptor,
        sender_factory: SenderFactory = Sender.from_conf,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._sender_factory = sender_factory
        self._http_transport = http_transport
        self._sender: Optional[Sender] = None
        self._sender_lock = asyncio.Lock()

    @property
    def has_sender(self) -> bool:
        return self._sender is not None

    def _open_sender(self) -> Sender:
        try:
            sender = self._sender_factory(self.config.sender_conf())
        except IngressError as e:
            raise TransportError(f"Could not open QuestDB sender: {e}", e) from e

        try:
            sender.establish()
        except IngressError as e:
            try:
                sender.close()
            except Exception:
                logger.exception("Error closing QuestDB sender after failed connect")
            raise TransportError(f"Could not open QuestDB sender: {e}", e) from e

        return sender

    @staticmethod
    def _write_row(
        sender: Sender,
        table: str,
        symbols: dict[str, str],
        columns: dict[str, Any],
        at: TimestampNanos,
    ) -> None:
        try:
            sender.row(table, symbols=symbols or None, columns=columns or None, at=at)
            sender.flush()
        except IngressError as e:
            raise TransportError(f"Insert into '{table}' failed: {e}", e) from e

    @staticmethod
    def _drain(sender: Sender) -> None:
        try:
            sender.flush()
        except Exception:
            logger.exception("Error flushing QuestDB sender on close")
        finally:
            try:
                sender.close()
                logger.info("QuestDB connection closed")
            except Exception:
                logger.exception("Error closing QuestDB connection")

    async def query(self, query: str, format: str = "json") -> Union[QueryResult, str]:
        """Run a SELECT statement and return a QueryResult (json) or CSV text."""
        if format not in QUERY_FORMATS:
            raise ToolValidationError(f"Unsupported format: {format!r}. Use 'json' or 'csv'.")
        require_select(query)

        async with httpx.AsyncClient(
            base_url=self.config.base_url,
            auth=self.config.basic_auth,
            transport=self._http_transport,
        ) as http:
            response = await http.get("/exec", params={"query": query, "fmt": format})

        if not response.is_success:
            raise QueryExecutionError(response.status_code, response.reason_phrase, response.text)

        if format == "json":
            return QueryResult.from_response(query, response.json())
        return response.text

    async def insert(self, table: str, data: dict[str, Any]) -> None:
        """Write one row through the line protocol and flush it."""
        if data.get(TIMESTAMP_KEY) is not None:
            at = TimestampNanos(to_epoch_millis(data[TIMESTAMP_KEY]) * 1_000_000)
        else:
            at = TimestampNanos.now()

        symbols, columns = split_fields(data)

        async with self._sender_lock:
            if self._sender is None:
                self._sender = await asyncio.to_thread(self._open_sender)
                logger.info("QuestDB sender initialized (host=%s, port=%s)", self.config.host, self.config.port)
            await asyncio.to_thread(self._write_row, self._sender, table, symbols, columns, at)

    async def list_tables(self) -> list[str]:
        result = await self.query(LIST_TABLES_SQL, "json")
        if not isinstance(result, QueryResult) or result.dataset is None:
            return []
        return [row[0] for row in result.dataset if isinstance(row, (list, tuple)) and row]

    async def describe_table(self, table: str) -> QueryResult:
        require_identifier(table)
        result = await self.query(DESCRIBE_TABLE_SQL.format(table=table), "json")
        return cast(QueryResult, result)

    async def close(self) -> None:
        """Flush and close the sender. Safe to call repeatedly; never raises."""
        async with self._sender_lock:
            sender, self._sender = self._sender, None
            if sender is None:
                return
            await asyncio.to_thread(self._drain, sender)
