"""CLI entry point for managing account logins outside an MCP client."""

import argparse
import asyncio
import sys

from outlook_accounts_mcp.exceptions import OutlookMCPError
from outlook_accounts_mcp.logging_config import configure_logging


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="outlook-accounts",
        description="Outlook Accounts MCP - manage Microsoft account logins",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("accounts", help="List configured accounts")

    for command, help_text in (
        ("login", "Log in interactively and wait for the browser redirect"),
        ("status", "Show who each account is signed in as"),
        ("logout", "Delete cached tokens"),
    ):
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument(
            "account",
            nargs="?",
            help="Account name (default: all configured accounts)",
        )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return asyncio.run(_run(args.command, getattr(args, "account", None)))
    except OutlookMCPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


async def _run(command: str, account: str | None) -> int:
    """Dispatch a subcommand."""
    from outlook_accounts_mcp.fanout.executor import resolve_accounts
    from outlook_accounts_mcp.tools._service import (
        get_account_registry,
        get_session_manager,
        get_settings,
    )

    configure_logging(get_settings().log_level)
    registry = get_account_registry()

    if command == "accounts":
        for name in registry.list():
            print(f"- {name}")
        return 0

    sessions = get_session_manager()

    if command == "logout":
        sessions.logout(account)
        print("✓ Cached tokens cleared")
        return 0

    if command == "status":
        for name in resolve_accounts(registry, account):
            token = await sessions.get_access_token(name)
            state = "✓ signed in" if token else "✗ not signed in"
            print(f"[{name}] {state}")
        return 0

    if command == "login":
        failures = 0
        try:
            for name in resolve_accounts(registry, account):
                login = await sessions.start_interactive_login(name)
                print(f"[{name}] If the browser does not open, visit:\n{login.authorization_url}")
                print(f"[{name}] Waiting for authentication callback...")
                try:
                    username = await login.completion
                except OutlookMCPError as e:
                    failures += 1
                    print(f"[{name}] ✗ {e}")
                else:
                    print(f"[{name}] ✓ Authenticated as {username}")
        finally:
            await sessions.aclose()
        return 1 if failures else 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
