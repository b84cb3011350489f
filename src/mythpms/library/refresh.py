"""Library server (Plex Media Server) client for section refreshes.

This module provides an HTTP client that asks the server to rescan one
library section after a link changed. The refresh is a courtesy: Plex
also notices changes on its own schedule, so failures are logged and
never abort processing.
"""

from __future__ import annotations

import logging

import httpx

from mythpms.config.models import LibraryServerConfig
from mythpms.domain import LibrarySection

logger = logging.getLogger(__name__)


class LibraryServerError(Exception):
    """Raised when the library server cannot be reached or refuses a request."""


class LibraryServerClient:
    """HTTP client for the library server's section refresh endpoint."""

    def __init__(
        self,
        config: LibraryServerConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Server URL, section ids and optional token.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self._config = config
        self._base_url = (config.url or "").rstrip("/")
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=self._config.timeout_seconds,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["X-Plex-Token"] = self._config.token
        return headers

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> LibraryServerClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def section_id(self, section: LibrarySection) -> str | None:
        if section is LibrarySection.MOVIE:
            return self._config.movie_section
        return self._config.tv_section

    def refresh_section_id(self, section_id: str) -> None:
        """Request a forced refresh of one section.

        Raises:
            LibraryServerError: If the request fails or is rejected.
        """
        client = self._get_client()
        try:
            response = client.get(
                f"/library/sections/{section_id}/refresh", params={"force": "1"}
            )
            if response.status_code == 401:
                raise LibraryServerError("Library server rejected the token")
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise LibraryServerError(f"Cannot connect to library server: {e}") from e
        except httpx.TimeoutException as e:
            raise LibraryServerError(f"Connection timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            raise LibraryServerError(f"HTTP error: {e}") from e
        except httpx.HTTPError as e:
            raise LibraryServerError(f"Request failed: {e}") from e

    def refresh_section(self, section: LibrarySection) -> bool:
        """Best-effort refresh of the section a recording was linked into.

        Returns:
            True if the server accepted the request, False if the refresh
            was skipped or failed (the reason is logged).
        """
        if not self._config.enabled or not self._base_url:
            logger.debug("Library server refresh disabled")
            return False

        section_id = self.section_id(section)
        if not section_id:
            logger.info("No library server section configured for %s", section.value)
            return False

        try:
            self.refresh_section_id(section_id)
        except LibraryServerError as e:
            logger.warning("Library refresh of section %s failed: %s", section_id, e)
            return False

        logger.info("Library refresh requested for section %s", section_id)
        return True
