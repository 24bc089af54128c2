"""Connection settings resolved from the process environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from questdb_mcp.core.errors import ConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9000


def _escape(value: str) -> str:
    # The sender conf-string grammar escapes ';' by doubling it.
    return value.replace(";", ";;")


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Where and how to reach QuestDB. Built once at startup."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    auto_flush_rows: Optional[int] = None
    auto_flush_interval: Optional[int] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def basic_auth(self) -> Optional[tuple[str, str]]:
        if not self.has_credentials:
            return None
        return (self.username, self.password)  # type: ignore[return-value]

    def sender_conf(self) -> str:
        """Build the configuration string accepted by ``Sender.from_conf``."""
        parts = [f"http::addr={self.host}:{self.port};"]

        if self.has_credentials:
            parts.append(f"username={_escape(self.username)};")  # type: ignore[arg-type]
            parts.append(f"password={_escape(self.password)};")  # type: ignore[arg-type]

        if self.auto_flush_rows:
            parts.append(f"auto_flush_rows={self.auto_flush_rows};")

        if self.auto_flush_interval:
            parts.append(f"auto_flush_interval={self.auto_flush_interval};")

        return "".join(parts)


def _int_from_env(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> ConnectionDescriptor:
    """Load QuestDB connection settings from environment variables."""
    if env is None:
        env = os.environ

    port = _int_from_env(env, "QUESTDB_PORT")

    return ConnectionDescriptor(
        host=env.get("QUESTDB_HOST") or DEFAULT_HOST,
        port=port if port is not None else DEFAULT_PORT,
        username=env.get("QUESTDB_USERNAME") or None,
        password=env.get("QUESTDB_PASSWORD") or None,
        auto_flush_rows=_int_from_env(env, "QUESTDB_AUTO_FLUSH_ROWS"),
        auto_flush_interval=_int_from_env(env, "QUESTDB_AUTO_FLUSH_INTERVAL"),
    )
