"""Chat-completion Port Interface."""

from abc import ABC, abstractmethod

from ..domain import ChatMessage


class ChatCompletionPort(ABC):
    """Abstract interface for chat-completion providers."""

    @abstractmethod
    def complete(
        self,
        messages: list[ChatMessage],
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        """Generate the next assistant turn for an ordered list of messages."""
        ...
