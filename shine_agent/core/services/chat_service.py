"""Use-case service for answering a chat message."""

from __future__ import annotations

import logging

from ..domain import ChatMessage, ChatResponse, Role
from ..domain.exceptions import EmptyQueryError
from ..domain.utils import normalize_text
from ..ports.llm_port import ChatCompletionPort
from .context_assembler import DEFAULT_CONTEXT_TOP_K, ContextAssembler
from .guide_classifier import needs_guide
from .prompt_composer import PromptComposer
from .prompts import EMPTY_REPLY_MESSAGE, FALLBACK_MESSAGE
from .response_cache import ResponseCache

logger = logging.getLogger(__name__)


class ChatService:
    """Orchestrates retrieval, prompt composition, generation and caching."""

    def __init__(
        self,
        composer: PromptComposer,
        llm: ChatCompletionPort,
        cache: ResponseCache,
        assembler: ContextAssembler | None = None,
        *,
        context_top_k: int = DEFAULT_CONTEXT_TOP_K,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        guide_max_tokens: int = 800,
        guide_temperature: float = 0.5,
    ) -> None:
        self.composer = composer
        self.llm = llm
        self.cache = cache
        self.assembler = assembler
        self.context_top_k = context_top_k
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.guide_max_tokens = guide_max_tokens
        self.guide_temperature = guide_temperature

    def answer(self, message: str) -> ChatResponse:
        """Run a full chat turn: best-effort retrieval, then generation."""
        clean_message = normalize_text(message).strip()
        if not clean_message:
            raise EmptyQueryError("Message cannot be empty or whitespace only")

        context = ""
        if self.assembler is not None:
            context = self.assembler.get_context(clean_message, k=self.context_top_k)

        return self.generate_response(clean_message, context)

    def generate_response(self, message: str, context: str = "") -> ChatResponse:
        """Generate the reply (and guide, when warranted) for ``message``.

        A failed primary completion is turned into a friendly retry message
        and is not cached. A failed guide completion only drops the guide.
        """
        cached = self.cache.get(message)
        if cached is not None:
            logger.debug("Response cache hit")
            return cached

        try:
            persona = self.composer.load_persona()
            system_prompt = self.composer.build_system_prompt(persona, context)
            text = self.llm.complete(
                [
                    ChatMessage(Role.SYSTEM, system_prompt),
                    ChatMessage(Role.USER, message),
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error("Error generating response: %s", e)
            return ChatResponse(text=FALLBACK_MESSAGE, guide="")

        text = (text or "").strip() or EMPTY_REPLY_MESSAGE

        guide = ""
        if needs_guide(message):
            guide = self._generate_guide(persona, message)

        response = ChatResponse(text=text, guide=guide)
        self.cache.put(message, response)
        return response

    def _generate_guide(self, persona: str, message: str) -> str:
        try:
            guide = self.llm.complete(
                [
                    ChatMessage(Role.SYSTEM, self.composer.build_guide_prompt(persona)),
                    ChatMessage(Role.USER, message),
                ],
                max_tokens=self.guide_max_tokens,
                temperature=self.guide_temperature,
            )
        except Exception as e:
            logger.warning("Error generating guide, replying without one: %s", e)
            return ""
        return (guide or "").strip()
