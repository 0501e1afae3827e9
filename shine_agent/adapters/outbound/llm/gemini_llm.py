"""Google Gemini chat completions through the google-genai SDK."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ....core.domain import ChatMessage, Role
from ....core.domain.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    MissingAPIKeyError,
)
from ....core.domain.utils import normalize_text
from ....core.ports.llm_port import ChatCompletionPort
from ..rate_limiter import RateLimiter

if TYPE_CHECKING:
    from google import genai
    from google.genai import types

logger = logging.getLogger(__name__)

MAX_RETRIES = 3


class GeminiChatAdapter(ChatCompletionPort):
    """Chat-completion port backed by Gemini ``generate_content``.

    System turns become the ``system_instruction``; assistant turns are sent
    with Gemini's ``model`` role.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout_ms: int = 30_000,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: Google AI API key.
            model: Gemini model name.
            timeout_ms: Per-request timeout in milliseconds.
            rate_limiter: Optional limiter shared by all chat calls.
        """
        self.api_key = api_key
        self.model_name = model
        self.timeout_ms = timeout_ms
        self.rate_limiter = rate_limiter or RateLimiter(None)
        self._client: genai.Client | None = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Get one at https://aistudio.google.com/ "
                    "and set GOOGLE_API_KEY in your .env file."
                )

            from google import genai
            from google.genai import types

            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout_ms),
            )
            logger.info("Gemini client initialized for model: %s", self.model_name)

        return self._client

    @staticmethod
    def _to_contents(messages: list[ChatMessage]) -> tuple[str | None, list["types.Content"]]:
        from google.genai import types

        system_parts = [normalize_text(m.content) for m in messages if m.role == Role.SYSTEM]
        contents = [
            types.Content(
                role="model" if m.role == Role.ASSISTANT else "user",
                parts=[types.Part(text=normalize_text(m.content))],
            )
            for m in messages
            if m.role != Role.SYSTEM
        ]
        system_instruction = "\n\n".join(system_parts) if system_parts else None
        return system_instruction, contents

    def complete(
        self,
        messages: list[ChatMessage],
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        """Generate the assistant reply.

        Raises:
            LLMRateLimitError: Quota still exceeded after retries.
            LLMConnectionError: The request failed or timed out.
            LLMGenerationError: The model returned no candidates.
        """
        from google.genai import errors, types

        client = self._get_client()
        system_instruction, contents = self._to_contents(messages)
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

        for attempt in range(MAX_RETRIES):
            self.rate_limiter.acquire()
            try:
                response = client.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config,
                )
            except errors.APIError as e:
                if e.code == 429 and attempt < MAX_RETRIES - 1:
                    wait_time = 2**attempt  # Exponential backoff
                    logger.warning("Rate limit hit, retrying in %ds...", wait_time)
                    time.sleep(wait_time)
                    continue
                if e.code == 429:
                    raise LLMRateLimitError(
                        "Rate limit reached. Please wait a moment and try again.",
                        cause=e,
                        context={"model": self.model_name},
                    ) from e
                raise LLMConnectionError(
                    f"Gemini request failed with status {e.code}",
                    cause=e,
                    context={"model": self.model_name},
                ) from e
            except Exception as e:
                raise LLMConnectionError(
                    "Gemini request failed", cause=e, context={"model": self.model_name}
                ) from e

            # Safety filters drop all candidates
            if not response.candidates:
                raise LLMGenerationError(
                    "Model returned no candidates", context={"model": self.model_name}
                )
            return normalize_text(response.text or "")

        raise LLMRateLimitError("Rate limit reached. Please wait a moment and try again.")
