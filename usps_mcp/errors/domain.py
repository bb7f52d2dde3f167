"""Typed domain exceptions for USPS tool calls.

Configuration and transport failures propagate out of the tool so the
MCP host sees a failed tool call. USPS-side errors are different: the
request succeeded but the payload carries an <Error> element, so tools
turn them into an ``{"error": ...}`` result instead of raising.

Usage:
    # In the client
    raise TransportError(response.status_code)

    # In a tool
    if service_error := ExternalServiceError.from_response(body):
        return service_error.to_payload()
"""

from usps_mcp.xml_tags import extract_first


class UspsMcpError(Exception):
    """Base exception for all USPS MCP errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigurationError(UspsMcpError):
    """A required setting is missing or malformed."""

    def __init__(self, setting: str, message: str | None = None) -> None:
        super().__init__(message or f"{setting} required")
        self.setting = setting


class TransportError(UspsMcpError):
    """The HTTP round trip to USPS failed.

    Attributes:
        status_code: HTTP status returned by USPS, or None when the
            request never got a response (DNS, connect, timeout).
    """

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        if message is None:
            message = f"USPS API error: {status_code}"
        super().__init__(message)
        self.status_code = status_code


class ExternalServiceError(UspsMcpError):
    """USPS answered with an explicit <Error> element."""

    def __init__(self, description: str, number: str = "") -> None:
        super().__init__(description)
        self.description = description
        self.number = number

    @classmethod
    def from_response(cls, body: str) -> "ExternalServiceError | None":
        """Build an error from a response body, or None if it has no <Error>.

        Args:
            body: Raw XML text returned by USPS.

        Returns:
            ExternalServiceError when an <Error> block is present.
        """
        error_block = extract_first(body, "Error")
        if not error_block:
            return None
        return cls(
            description=extract_first(error_block, "Description"),
            number=extract_first(error_block, "Number"),
        )

    def to_payload(self) -> dict:
        """Return the error-shaped tool result."""
        return {"error": self.description}
