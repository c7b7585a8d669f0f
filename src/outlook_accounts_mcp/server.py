"""MCP server entry point for outlook-accounts-mcp."""

import sys

from outlook_accounts_mcp.exceptions import ConfigError
from outlook_accounts_mcp.logging_config import configure_logging
from outlook_accounts_mcp.tools import mcp
from outlook_accounts_mcp.tools._service import get_session_manager, get_settings


def main() -> None:
    """Entry point for the MCP server.

    Configuration is validated before the transport starts; an invalid
    configuration exits with status 1.
    """
    try:
        settings = get_settings()
        configure_logging(settings.log_level)
        # Builds one authentication client per account up front
        get_session_manager()
    except (ConfigError, ValueError) as e:
        print(f"outlook-accounts-mcp: {e}", file=sys.stderr)
        sys.exit(1)

    mcp.run()


if __name__ == "__main__":
    main()
