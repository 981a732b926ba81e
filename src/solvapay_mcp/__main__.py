"""Entry point for CLI execution as a module."""

from solvapay_mcp.cli import main

if __name__ == "__main__":
    main()
