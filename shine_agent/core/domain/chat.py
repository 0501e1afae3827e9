"""Chat turn models."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Speaker of a chat turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """One ``{role, content}`` turn sent to the chat-completion service."""

    role: Role
    content: str


@dataclass(frozen=True)
class ChatResponse:
    """Result of a chat turn.

    Attributes:
        text: The assistant reply.
        guide: Structured step-by-step guide, empty when none was requested.
    """

    text: str
    guide: str = ""

    @property
    def has_guide(self) -> bool:
        return bool(self.guide.strip())
