import logging
import os
import signal
import sys

from questdb_mcp.app import mcp

# --- TOOL REGISTRATION ---
# Tools must be imported here to execute their @mcp.tool() decorators.
# This registers them with the singleton `mcp` instance defined in `app.py`.
#
# Note: These imports must happen at the module level (not inside if __name__)
# to ensure tools are registered even when this module is imported by others.
# -------------------------
from questdb_mcp.tools import insert, query, schema  # noqa: F401


def configure_logging() -> None:
    # stdout belongs to the stdio transport; everything local goes to stderr.
    logging.basicConfig(
        level=os.environ.get("QUESTDB_MCP_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def install_signal_handlers() -> None:
    # SIGTERM takes the same path as Ctrl-C, so the lifespan still drains the sender.
    signal.signal(signal.SIGTERM, signal.default_int_handler)


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()
    install_signal_handlers()

    transport = "http" if "--transport" in argv and "http" in argv else "stdio"

    try:
        if transport == "http":
            host = os.environ.get("HOST", "0.0.0.0")
            port = int(os.environ.get("PORT", "19003"))
            mcp.run(transport="http", host=host, port=port)
        else:
            mcp.run()
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("QuestDB MCP server stopped")


if __name__ == "__main__":
    main()
