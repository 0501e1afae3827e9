"""Persona Source Port Interface."""

from abc import ABC, abstractmethod


class PersonaSourcePort(ABC):
    """Read-only access to persona documents by name."""

    @abstractmethod
    def load(self, name: str) -> str:
        """Return the text of a persona document.

        Raises:
            PersonaDocumentError: If the document cannot be read.
        """
        ...
