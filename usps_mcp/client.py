"""Async HTTP client for the USPS Web Tools ShippingAPI.dll endpoint.

Every call is a GET with two query parameters: ``API`` selects the
operation and ``XML`` carries the percent-encoded request document.

Example:
    async with UspsClient(settings) as client:
        body = await client.fetch("CityStateLookup", xml)
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from usps_mcp.config import USER_AGENT, UspsSettings
from usps_mcp.errors import TransportError
from usps_mcp.throttle import RequestThrottle

logger = logging.getLogger(__name__)


def build_url(base_url: str, api: str, xml: str) -> str:
    """Return the full request URL with the XML percent-encoded.

    ``quote`` with no safe characters matches encodeURIComponent closely
    enough that '<', '>', '&', '=' and spaces never appear literally.
    """
    return f"{base_url}?API={quote(api, safe='')}&XML={quote(xml, safe='')}"


class UspsClient:
    """Throttled async client for USPS Web Tools.

    Attributes:
        settings: Endpoint, timeout and throttle configuration.
        throttle: Shared RequestThrottle for every request this client makes.
    """

    def __init__(
        self,
        settings: UspsSettings | None = None,
        throttle: RequestThrottle | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration; defaults to UspsSettings().
            throttle: Request throttle; defaults to one using settings.min_interval.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        self.settings = settings or UspsSettings()
        self.throttle = throttle or RequestThrottle(min_interval=self.settings.min_interval)
        self._http = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=self.settings.timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "UspsClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def fetch(self, api: str, xml: str) -> str:
        """Send one throttled request and return the response body.

        Args:
            api: USPS API selector (e.g. "Verify", "TrackV2").
            xml: Request document, unencoded.

        Returns:
            Raw response body text.

        Raises:
            TransportError: On non-2xx status or network failure.
        """
        url = build_url(self.settings.base_url, api, xml)

        await self.throttle.acquire()
        logger.info("USPS request: API=%s", api)

        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("USPS API %s returned %s", api, e.response.status_code)
            raise TransportError(e.response.status_code)
        except httpx.RequestError as e:
            logger.warning("USPS API %s request failed: %s", api, e)
            raise TransportError(None, f"USPS request failed: {e}")

        return response.text
