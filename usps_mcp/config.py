"""Environment-driven settings for the USPS MCP server.

Read from (all optional except the credential, which is checked lazily
at first tool use rather than at startup):
- USPS_USER_ID: Web Tools user id (register at usps.com/business/web-tools-apis)
- USPS_API_BASE_URL: ShippingAPI.dll endpoint
- USPS_RATE_LIMIT_MS: minimum spacing between outbound requests
- USPS_TIMEOUT_SECONDS: HTTP timeout
- USPS_LOG_LEVEL: stderr log level
"""

import logging
import os
from typing import Literal, get_args

from pydantic import BaseModel, Field

from usps_mcp.errors import ConfigurationError

logger = logging.getLogger(__name__)

USER_ID_ENV = "USPS_USER_ID"
DEFAULT_BASE_URL = "https://secure.shippingapis.com/ShippingAPI.dll"
USER_AGENT = "mcp-usps/1.0.0"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class UspsSettings(BaseModel):
    """Runtime configuration for the USPS client and server."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="USPS Web Tools endpoint")
    rate_limit_ms: int = Field(default=500, ge=0, description="Minimum ms between requests")
    timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout")
    log_level: LogLevel = Field(default="INFO", description="Log level for stderr logging")

    @property
    def min_interval(self) -> float:
        """Throttle interval in seconds."""
        return self.rate_limit_ms / 1000

    @classmethod
    def from_env(cls) -> "UspsSettings":
        """Build settings from USPS_* environment variables.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed or the
                log level is unknown.
        """
        values: dict = {}
        if base_url := os.environ.get("USPS_API_BASE_URL"):
            values["base_url"] = base_url
        if log_level := os.environ.get("USPS_LOG_LEVEL", "").strip():
            if log_level.upper() not in get_args(LogLevel):
                raise ConfigurationError(
                    "USPS_LOG_LEVEL",
                    f"USPS_LOG_LEVEL must be one of {', '.join(get_args(LogLevel))}, "
                    f"got {log_level!r}",
                )
            values["log_level"] = log_level.upper()

        for env_name, field_name, cast in (
            ("USPS_RATE_LIMIT_MS", "rate_limit_ms", int),
            ("USPS_TIMEOUT_SECONDS", "timeout_seconds", float),
        ):
            raw = os.environ.get(env_name, "").strip()
            if not raw:
                continue
            try:
                values[field_name] = cast(raw)
            except ValueError:
                raise ConfigurationError(
                    env_name, f"{env_name} must be a number, got {raw!r}"
                )

        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError("USPS settings", f"Invalid USPS settings: {e}")


def get_user_id() -> str:
    """Return the USPS Web Tools user id from the environment.

    Read on every call so a credential added after startup is picked up.

    Raises:
        ConfigurationError: If USPS_USER_ID is unset or blank.
    """
    user_id = os.environ.get(USER_ID_ENV, "").strip()
    if not user_id:
        raise ConfigurationError(
            USER_ID_ENV,
            f"{USER_ID_ENV} required. Register free at "
            "https://www.usps.com/business/web-tools-apis/",
        )
    return user_id
