"""System prompt construction from persona documents and retrieved context."""

from __future__ import annotations

import logging

from ..ports.persona_port import PersonaSourcePort
from .prompts import (
    CONTEXT_BLOCK,
    DEFAULT_PERSONA,
    GUIDE_DIRECTIVE,
    PERSONA_HEADER,
    TURN_INSTRUCTIONS,
)

logger = logging.getLogger(__name__)


class PromptComposer:
    """Merge the persona, retrieved knowledge and turn instructions into prompts.

    Persona documents are configuration: they are read in a fixed order through
    a ``PersonaSourcePort``. If any one of them cannot be read, the whole
    persona is replaced by ``DEFAULT_PERSONA`` rather than sent with gaps.
    """

    def __init__(
        self,
        source: PersonaSourcePort,
        document_names: list[str],
        persona_name: str,
    ) -> None:
        self.source = source
        self.document_names = list(document_names)
        self.persona_name = persona_name

    def load_persona(self) -> str:
        """Concatenate all persona documents, or fall back to the default persona."""
        documents: list[str] = []
        for name in self.document_names:
            try:
                documents.append(self.source.load(name).strip())
            except Exception as e:
                logger.error("Error loading persona document %s, using default persona: %s", name, e)
                return DEFAULT_PERSONA

        if not documents:
            return DEFAULT_PERSONA

        return PERSONA_HEADER.format(
            persona_name=self.persona_name,
            documents="\n\n".join(documents),
        )

    def build_system_prompt(
        self,
        persona: str,
        retrieved_context: str = "",
        instructions: str = TURN_INSTRUCTIONS,
    ) -> str:
        """Persona, then the knowledge context block (if any), then instructions."""
        parts = [persona]

        if retrieved_context and retrieved_context.strip():
            parts.append(CONTEXT_BLOCK.format(context=retrieved_context.strip()))

        if instructions and instructions.strip():
            parts.append(instructions.strip())

        return "\n\n".join(parts)

    def build_guide_prompt(self, persona: str) -> str:
        """System prompt for the separate guide-generation call."""
        return f"{persona}\n\n{GUIDE_DIRECTIVE}"
