"""
Shared plumbing for providers that talk to their backend over plain HTTP.
"""

import json
from typing import Any, AsyncIterator, Dict, Optional
import httpx
from loguru import logger

from .base import BaseProvider
from ..core.exceptions import TransportFailureError, UpstreamError, DecodeFailureError
from ..models.internal import ProviderSettings
from ..services.session import ConversationStore


class HTTPProvider(BaseProvider):
    """
    Provider backed by a JSON-over-HTTP API.

    Uses the process-wide ``httpx.AsyncClient`` when one is handed in, else
    opens its own. The provider timeout is applied per request.
    """

    default_base_url: str = ""

    def __init__(
        self,
        settings: ProviderSettings,
        store: Optional[ConversationStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(settings, store)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()

    @property
    def url(self) -> str:
        return self._settings.base_url or self.default_base_url

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.get_api_key()}",
            "Content-Type": "application/json",
        }

    async def _post_json(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST ``payload`` and decode the JSON reply."""
        provider = self.get_provider()
        logger.debug(f"Using {provider} - {self.get_model_tag()} endpoint to send non-streaming message")

        try:
            response = await self._client.post(
                self.url,
                json=payload,
                headers=self._headers(),
                timeout=self._settings.timeout,
            )
        except httpx.TimeoutException:
            raise TransportFailureError(provider, "timed out") from None
        except httpx.HTTPError as e:
            raise TransportFailureError(provider, str(e)) from e

        if not response.is_success:
            raise UpstreamError(provider, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeFailureError(provider, str(e)) from e

    async def _stream_sse(self, payload: Dict[str, Any]) -> AsyncIterator[Dict[str, Any]]:
        """
        POST ``payload`` and yield each decoded ``data:`` event until ``[DONE]``.

        Malformed event lines are skipped.
        """
        provider = self.get_provider()
        logger.debug(f"Using {provider} - {self.get_model_tag()} endpoint to send message")

        try:
            async with self._client.stream(
                "POST",
                self.url,
                json=payload,
                headers=self._headers(),
                timeout=self._settings.timeout,
            ) as response:
                if not response.is_success:
                    body = await response.aread()
                    raise UpstreamError(provider, response.status_code, body.decode("utf-8", errors="replace"))

                async for line in response.aiter_lines():
                    line = line.strip()
                    if not line.startswith("data:"):
                        continue
                    data = line[len("data:"):].strip()
                    if data == "[DONE]":
                        break
                    try:
                        yield json.loads(data)
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping malformed {provider} stream line: {data[:80]}")
        except httpx.TimeoutException:
            raise TransportFailureError(provider, "timed out") from None
        except httpx.HTTPError as e:
            raise TransportFailureError(provider, str(e)) from e

    async def aclose(self) -> None:
        """Close the HTTP client if this provider opened it."""
        if self._owns_client:
            await self._client.aclose()
