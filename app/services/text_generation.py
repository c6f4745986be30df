"""
Text generation client.

Talks to an OpenAI-compatible chat completions endpoint (OpenRouter by default)
and returns the raw reply text. Interpreting the text is the caller's job.
"""
from typing import Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import DependencyFailureException
from app.core.logging import logger


class TextGenerationService:
    """
    Thin async client for chat completions.

    USAGE:
        reply = await text_generation_service.generate(
            [{"role": "user", "content": "Say hi"}]
        )
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_url = api_url or settings.LLM_API_URL
        self._api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self._model = model or settings.LLM_MODEL
        self._temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        self._timeout = timeout_seconds or settings.LLM_TIMEOUT_SECONDS
        self._transport = transport

        if not self._api_key:
            logger.warning("No LLM_API_KEY set. Review moderation calls will fail.")

    async def generate(self, messages: List[Dict[str, str]]) -> str:
        """
        Send a message list and return the assistant reply text.

        Raises:
            DependencyFailureException: no API key, transport error, non-2xx status,
                or a response without a text reply
        """
        if not self._api_key:
            raise DependencyFailureException("Text generation is not configured")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self._model,
            "messages": messages,
            "temperature": self._temperature,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._api_url, headers=headers, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise DependencyFailureException(
                "Text generation timed out", details={"timeout_seconds": self._timeout}
            ) from e
        except httpx.HTTPStatusError as e:
            raise DependencyFailureException(
                "Text generation request failed",
                details={"status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise DependencyFailureException(f"Text generation request failed: {e}") from e

        content = self._extract_content(data)
        if content is None:
            raise DependencyFailureException("Text generation returned no content")
        return content

    @staticmethod
    def _extract_content(data: dict) -> Optional[str]:
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None


# Global service instance
text_generation_service = TextGenerationService()
