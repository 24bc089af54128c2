"""
Access control logic for the QuestDB MCP server.

Read-Only SQL
-------------
The `query` tool only runs statements that start with SELECT. Writes go
through the `insert` tool and the line protocol, never through SQL, so an
agent exploring the database cannot drop or alter tables by accident.

Table names that end up inside generated SQL (`describe_table`) must be
plain identifiers; anything else is refused before it reaches a query string.
"""

import re

from questdb_mcp.core.errors import InvalidIdentifierError, SafetyRejection

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def require_select(query: str) -> None:
    """
    Enforces the SELECT-only policy for SQL text.

    Raises:
        SafetyRejection: If the statement does not begin with SELECT.
    """
    if not query.strip().upper().startswith("SELECT"):
        raise SafetyRejection("Only SELECT queries are allowed for safety reasons")


def require_identifier(name: str) -> str:
    """
    Checks that `name` is safe to interpolate into SQL as a table name.

    Raises:
        InvalidIdentifierError: If the name does not match IDENTIFIER_PATTERN.
    """
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.fullmatch(name):
        raise InvalidIdentifierError(f"Invalid table name: {name}")
    return name
