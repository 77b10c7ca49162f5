"""Chat client for an OpenAI-style completion endpoint that answers in JSON."""

import json
from typing import Any, Optional, Protocol

import httpx
from loguru import logger

from .config import APIConfig
from .errors import ContentMissingError, MalformedResponseError, RequestError
from .utils.cancellation import CancellationToken
from .utils.json_utils import parse_json_loose
from .utils.retry import fetch_with_retry


class ChatClient(Protocol):
    async def chat_json(
        self,
        messages: list[dict],
        *,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        token: Optional[CancellationToken] = None,
    ) -> dict:
        ...


class AIClient:
    """Sends chat messages to ``<base_url>/llm`` and returns the decoded JSON reply.

    Uses JSON mode (``response_format: {type: "json_object"}``) and the
    retrying transport. Pass ``http_client`` to share or mock the connection
    pool; otherwise the client owns one and closes it in ``aclose``.
    """

    def __init__(self, config: Optional[APIConfig] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config or APIConfig()
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=self.config.timeout)

    @property
    def url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/llm"

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()

    async def __aenter__(self) -> "AIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_token}",
        }

    async def chat_json(
        self,
        messages: list[dict],
        *,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        token: Optional[CancellationToken] = None,
        max_attempts: Optional[int] = None,
    ) -> dict:
        """Send ``messages`` and return the reply content parsed as a JSON object.

        Raises:
            CancellationError: ``token`` fired before a response arrived.
            TransportError: retries exhausted against the endpoint.
            RequestError: the endpoint answered with a non-success status.
            ContentMissingError: the reply carried no message content.
            MalformedResponseError: the reply or its content was not usable JSON.
        """
        body: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": False,
            "response_format": {"type": "json_object"},
        }

        response = await fetch_with_retry(
            self.http,
            self.url,
            method="POST",
            headers=self._headers(),
            json=body,
            token=token,
            max_attempts=max_attempts or self.config.max_attempts,
        )

        if not response.is_success:
            raise RequestError(
                f"AI request failed: {response.status_code} {response.reason_phrase} {response.text}".rstrip(),
                status_code=response.status_code,
                body=response.text,
            )

        try:
            envelope = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"AI response is not valid JSON: {e}") from e

        content = _message_content(envelope)
        if not content:
            raise ContentMissingError("AI response missing content")

        if isinstance(content, dict):
            return content

        try:
            data = parse_json_loose(content)
        except json.JSONDecodeError as e:
            logger.debug(f"Unparseable AI content: {content[:200]}")
            raise MalformedResponseError(f"Failed to parse AI content as JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from the AI, got {type(data).__name__}"
            )
        return data


def _message_content(envelope: Any) -> Any:
    if not isinstance(envelope, dict):
        return None
    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")
