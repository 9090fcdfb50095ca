"""Settings loader for the IDAM client, driven by environment variables.

Variables:
    IDAM_BASE_URL         IDAM service base URL (required)
    IDAM_APPLICATION_ID   Default application id for app-scoped endpoints
    IDAM_REQUEST_TIMEOUT  Request timeout in seconds (default 5, 0 disables)
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests

from idam.core.idam.client import UserAuthClient

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 5.0


@dataclass(frozen=True)
class ClientConfig:
    """IDAM client configuration container."""
    base_url: str
    application_id: str = ""
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError(
                f"request_timeout must be a positive number of seconds or None, got {self.request_timeout!r}"
            )

    def create_client(self, session: Optional[requests.Session] = None) -> UserAuthClient:
        """Build a UserAuthClient from this configuration.

        Args:
            session: Optional pre-configured transport

        Returns:
            UserAuthClient bound to ``base_url``
        """
        return UserAuthClient(
            self.base_url,
            session=session,
            timeout=self.request_timeout,
            application_id=self.application_id,
        )


def _parse_timeout(raw: str) -> Optional[float]:
    """Parse IDAM_REQUEST_TIMEOUT; ``0`` means no client-side timeout."""
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"IDAM_REQUEST_TIMEOUT must be a number of seconds, got '{raw}'") from None
    if value < 0:
        raise ValueError("IDAM_REQUEST_TIMEOUT must not be negative")
    return value or None


def load_settings() -> ClientConfig:
    """Load client settings from the environment.

    Raises:
        RuntimeError: If IDAM_BASE_URL is not set
        ValueError: If IDAM_REQUEST_TIMEOUT is not a valid number
    """
    base_url = os.environ.get("IDAM_BASE_URL", "").strip()
    if not base_url:
        raise RuntimeError("Environment variable IDAM_BASE_URL is required.")

    application_id = os.environ.get("IDAM_APPLICATION_ID", "").strip()

    timeout_raw = os.environ.get("IDAM_REQUEST_TIMEOUT", "").strip()
    request_timeout = _parse_timeout(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT

    logger.debug(
        "[settings] base_url=%s; application_id=%s; timeout=%s",
        base_url, application_id or "<unset>", request_timeout,
    )

    return ClientConfig(
        base_url=base_url,
        application_id=application_id,
        request_timeout=request_timeout,
    )
