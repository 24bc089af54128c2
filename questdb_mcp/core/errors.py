"""Exception hierarchy for the QuestDB MCP server."""

from typing import Optional


class QuestDBMCPError(Exception):
    """Base class for all errors raised by questdb_mcp."""

    pass


class ConfigurationError(QuestDBMCPError, ValueError):
    """Raised when an environment value cannot be used."""

    pass


class ToolValidationError(QuestDBMCPError, ValueError):
    """Raised when tool input is structurally malformed."""

    pass


class SafetyRejection(QuestDBMCPError, PermissionError):
    """Raised when a statement is refused by the read-only policy."""

    pass


class InvalidIdentifierError(SafetyRejection):
    """Raised when a table name is unsafe to interpolate into SQL."""

    pass


class TimestampParseError(QuestDBMCPError, ValueError):
    """Raised when an insert record carries an unusable timestamp."""

    pass


class QueryExecutionError(QuestDBMCPError):
    """Raised when the /exec endpoint answers with a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Query failed: {status_code} {reason}. {body}")


class TransportError(QuestDBMCPError):
    """Raised when the line-protocol sender fails to write, flush or close."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
