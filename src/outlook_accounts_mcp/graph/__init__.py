"""Microsoft Graph resource client."""

from outlook_accounts_mcp.graph.client import GraphClient, TokenProvider

__all__ = ["GraphClient", "TokenProvider"]
