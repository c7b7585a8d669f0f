from outlook_accounts_mcp.server import main

main()
