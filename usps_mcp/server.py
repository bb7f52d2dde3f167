"""FastMCP server for USPS Web Tools.

Exposes address validation, ZIP lookup, city/state lookup, package
tracking and rate calculation as MCP tools over stdio.

The server manages:
- One UspsClient (HTTP pool + request throttle) shared by every tool
- Settings loaded from USPS_* environment variables at startup

stdout carries the MCP protocol, so logging goes to stderr only.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from usps_mcp.client import UspsClient
from usps_mcp.config import UspsSettings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: Any):
    """Create the shared USPS client.

    Resources yielded are available to all tools via ctx.lifespan_context:
    - settings: UspsSettings loaded from the environment
    - client: UspsClient owning the HTTP pool and request throttle

    The client is closed when the server shuts down.
    """
    settings = UspsSettings.from_env()
    client = UspsClient(settings)
    logger.info(
        "USPS client ready (endpoint=%s, min interval=%dms)",
        settings.base_url,
        settings.rate_limit_ms,
    )
    try:
        yield {
            "settings": settings,
            "client": client,
        }
    finally:
        await client.close()


# Create the FastMCP server instance
mcp = FastMCP(name="USPS", lifespan=lifespan)


# Import and register tools
from usps_mcp.tools import (
    calculate_rate,
    city_state_lookup,
    lookup_zipcode,
    track_package,
    validate_address,
)

# Register as MCP tools using decorator pattern
mcp.tool()(validate_address)
mcp.tool()(lookup_zipcode)
mcp.tool()(city_state_lookup)
mcp.tool()(track_package)
mcp.tool()(calculate_rate)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr, leaving stdout to the MCP transport."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Run the server with stdio transport, exiting 1 on fatal errors."""
    try:
        configure_logging(UspsSettings.from_env().log_level)
        mcp.run(transport="stdio")
    except Exception:
        configure_logging()
        logger.exception("Fatal: USPS MCP server stopped")
        sys.exit(1)


if __name__ == "__main__":
    main()
