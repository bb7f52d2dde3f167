"""Error handling for the USPS MCP server.

This package provides typed exceptions for the three failure modes a tool
call can hit:
- ConfigurationError: required settings missing or malformed
- TransportError: non-2xx HTTP status or network failure
- ExternalServiceError: USPS returned an <Error> element in its response
"""

from usps_mcp.errors.domain import (
    ConfigurationError,
    ExternalServiceError,
    TransportError,
    UspsMcpError,
)

__all__ = [
    "UspsMcpError",
    "ConfigurationError",
    "TransportError",
    "ExternalServiceError",
]
