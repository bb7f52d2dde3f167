"""Entry point for ``python -m usps_mcp``."""

from usps_mcp.server import main

if __name__ == "__main__":
    main()
