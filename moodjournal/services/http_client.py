"""
Shared HTTP client manager with connection pooling.

The insight backend is called on every "Get Insights" and on most saves;
one pooled httpx.AsyncClient serves all of them instead of paying for a new
connection per request.

Usage:
    from moodjournal.services.http_client import http_client_manager

    client = await http_client_manager.get_client()
    response = await client.post(url, json=payload)

Lifecycle:
    # In main.py lifespan
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await http_client_manager.startup()
        yield
        await http_client_manager.shutdown()
"""

import logging
from typing import Optional

import httpx

from moodjournal import __version__
from moodjournal.core.config import settings

logger = logging.getLogger("MoodJournal.HTTP.Client")

USER_AGENT = f"mood-journal/{__version__}"


class HTTPClientManager:
    """
    Owns one pooled httpx.AsyncClient.

    Configuration:
    - max_connections: Maximum total connections (default: 20)
    - max_keepalive_connections: Max idle connections to keep (default: 5)
    - default_timeout: Request timeout in seconds
    """

    def __init__(
        self,
        max_connections: int = 20,
        max_keepalive_connections: int = 5,
        default_timeout: float = 30.0,
    ):
        self._max_connections = max_connections
        self._max_keepalive_connections = max_keepalive_connections
        self._default_timeout = default_timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self._max_connections,
            max_keepalive_connections=self._max_keepalive_connections,
        )

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def startup(self) -> None:
        """Create the pooled client. Call once during application startup."""
        if self._client is not None:
            logger.warning("HTTP client manager already initialized")
            return

        self._client = httpx.AsyncClient(
            limits=self.limits,
            timeout=httpx.Timeout(self._default_timeout),
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            follow_redirects=True,
        )
        logger.info(
            f"HTTP client manager initialized "
            f"(max_connections={self._max_connections}, "
            f"max_keepalive={self._max_keepalive_connections}, "
            f"timeout={self._default_timeout}s)"
        )

    async def shutdown(self) -> None:
        """Close the pooled client and release its connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP client manager shut down")

    async def get_client(self) -> httpx.AsyncClient:
        """
        Get the shared client, creating it lazily if startup() was skipped
        (scripts and tests).
        """
        if self._client is None:
            logger.warning("HTTP client accessed before startup - initializing now")
            await self.startup()
        return self._client


# Global singleton instance
http_client_manager = HTTPClientManager(default_timeout=settings.INSIGHT_TIMEOUT_SECONDS)
