"""
Connection management.
"""
from typing import Optional
import httpx
from loguru import logger

from .config import Settings


class ConnectionManager:
    """
    Owns the process-wide HTTP connection pool shared by every HTTP provider.
    Initialized once in the app lifespan and kept on app.state.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._http: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the connection pool at startup."""
        if self._http is not None:
            logger.warning("ConnectionManager already initialized, skipping")
            return

        logger.info("Initializing HTTP connection pool...")
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.request_timeout),
            limits=httpx.Limits(
                max_connections=self.settings.http_max_connections,
                max_keepalive_connections=self.settings.http_keepalive_connections,
            ),
            follow_redirects=True,
        )
        logger.info("HTTP connection pool initialized")

    def get_http_client(self) -> httpx.AsyncClient:
        """Get shared HTTP client."""
        if self._http is None:
            raise RuntimeError("ConnectionManager not initialized. Call initialize() first.")
        return self._http

    async def close(self) -> None:
        """Close the pool, waiting for in-flight connections to be released."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.info("HTTP client closed")
