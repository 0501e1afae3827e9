"""Document Extractor Port Interface."""

from abc import ABC, abstractmethod
from pathlib import Path


class DocumentExtractorPort(ABC):
    """Turns a knowledge file into plain text."""

    @abstractmethod
    def extract(self, path: Path) -> str:
        """Extract plain text from ``path``.

        Raises:
            DocumentExtractionError: If the file cannot be read.
        """
        ...
