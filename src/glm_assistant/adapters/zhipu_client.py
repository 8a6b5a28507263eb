"""
Async HTTP transport for the Zhipu AI open platform
https://open.bigmodel.cn/
"""

from __future__ import annotations

from typing import Any

import httpx

from glm_assistant.adapters.models import ChatCompletionRequest
from glm_assistant.core.errors import MalformedResponseError, NetworkFailureError

ZHIPU_API_BASE_URL = "https://open.bigmodel.cn/api/paas/v4"


class ZhipuAPIClient:
    """
    Thin async client for the Zhipu chat-completions endpoint.

    The API key is passed per request, so one client can serve any
    credential currently stored in preferences.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, defaults to the public v4 endpoint
            timeout: Transport timeout in seconds for an owned client
            client: Pre-built ``httpx.AsyncClient`` (tests, shared pools)
        """
        self.base_url = (base_url or ZHIPU_API_BASE_URL).rstrip("/")
        self._owns_client = client is None
        self.session = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    async def create_chat_completion(self, api_key: str, request: ChatCompletionRequest) -> dict[str, Any]:
        """
        POST a chat-completion request and return the decoded JSON body.

        Raises:
            NetworkFailureError: DNS, connection or timeout failure
            MalformedResponseError: Non-2xx status, undecodable body or a body that is not JSON
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        try:
            response = await self.session.post(
                self.chat_completions_url,
                content=request.to_json_bytes(),
                headers=headers,
            )
        except httpx.TransportError as e:
            raise NetworkFailureError(f"Failed to reach Zhipu API: {e}") from e
        except httpx.DecodingError as e:
            raise MalformedResponseError(f"Zhipu API response body could not be decoded: {e}") from e

        if response.is_error:
            raise MalformedResponseError(
                f"Zhipu API returned HTTP {response.status_code}",
                status_code=response.status_code,
                details=_error_details(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("Zhipu API response is not valid JSON", status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise MalformedResponseError("Zhipu API response is not a JSON object", status_code=response.status_code)
        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self.session.aclose()

    async def __aenter__(self) -> ZhipuAPIClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _error_details(response: httpx.Response) -> Any:  # noqa: ANN401
    # Zhipu wraps failures as {"error": {"code": ..., "message": ...}}
    try:
        payload = response.json()
    except ValueError:
        return response.text or None
    if isinstance(payload, dict) and "error" in payload:
        return payload["error"]
    return payload


__all__ = ["ZHIPU_API_BASE_URL", "ZhipuAPIClient"]
