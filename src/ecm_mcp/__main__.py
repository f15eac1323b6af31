from ecm_mcp.cli import main

main()
