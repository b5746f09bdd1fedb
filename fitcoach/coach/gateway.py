"""Client for the upstream chat-completion gateway.

One call to ``complete`` is one HTTP request; nothing is retried.
"""

import httpx
from loguru import logger

from fitcoach.coach.errors import (
    UpstreamQuotaExhaustedError,
    UpstreamRateLimitedError,
    UpstreamUnexpectedError,
)


class GatewayClient:
    def __init__(self, http: httpx.AsyncClient, url: str, api_key: str, model: str):
        self._http = http
        self._url = url
        self._api_key = api_key
        self._model = model

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send a chat exchange upstream and return the first completion text.

        Args:
            messages: Chat messages as ``{"role", "content"}`` dicts

        Returns:
            Text of the first completion

        Raises:
            UpstreamRateLimitedError: Gateway answered 429
            UpstreamQuotaExhaustedError: Gateway answered 402
            UpstreamUnexpectedError: Any other failure
        """
        try:
            resp = await self._http.post(
                self._url,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json={"model": self._model, "messages": messages},
            )
        except httpx.TimeoutException as e:
            logger.error(f"AI gateway timeout: {e}")
            raise UpstreamUnexpectedError("AI gateway request timed out") from e
        except httpx.RequestError as e:
            logger.error(f"AI gateway unreachable: {e}")
            raise UpstreamUnexpectedError("AI gateway unreachable") from e

        if not resp.is_success:
            logger.error(f"AI gateway error: {resp.status_code} {resp.text}")
            if resp.status_code == httpx.codes.TOO_MANY_REQUESTS:
                raise UpstreamRateLimitedError()
            if resp.status_code == httpx.codes.PAYMENT_REQUIRED:
                raise UpstreamQuotaExhaustedError()
            raise UpstreamUnexpectedError(f"AI gateway error: {resp.status_code}", upstream_status=resp.status_code)

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"AI gateway returned an unexpected body: {resp.text[:500]}")
            raise UpstreamUnexpectedError("AI gateway returned an unexpected response") from e

        if not isinstance(content, str):
            logger.error(f"AI gateway completion has no text content: {resp.text[:500]}")
            raise UpstreamUnexpectedError("AI gateway returned an unexpected response")
        return content
