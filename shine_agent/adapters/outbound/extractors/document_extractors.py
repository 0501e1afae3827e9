"""Plain-text extraction for knowledge files."""

from __future__ import annotations

import logging
from pathlib import Path

from ....core.domain.exceptions import DocumentExtractionError
from ....core.domain.utils import normalize_text
from ....core.ports.extractor_port import DocumentExtractorPort

logger = logging.getLogger(__name__)


class TextFileExtractor(DocumentExtractorPort):
    """Markdown and plain text files, read as UTF-8."""

    def extract(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentExtractionError(
                f"Could not read {path.name}", cause=e, context={"path": str(path)}
            ) from e


class PdfExtractor(DocumentExtractorPort):
    """PDF text via pypdf, one block per page."""

    def extract(self, path: Path) -> str:
        from pypdf import PdfReader

        try:
            reader = PdfReader(path)
            text_parts = []
            for page in reader.pages:
                text = normalize_text(page.extract_text() or "")
                if text.strip():
                    text_parts.append(text)
        except Exception as e:
            raise DocumentExtractionError(
                f"Error extracting PDF text from {path.name}", cause=e, context={"path": str(path)}
            ) from e

        text = "\n\n".join(text_parts)
        logger.info("Extracted %d characters from %s", len(text), path.name)
        return text


class DocxExtractor(DocumentExtractorPort):
    """DOCX text via python-docx: paragraphs, then table rows."""

    def extract(self, path: Path) -> str:
        from docx import Document

        try:
            document = Document(str(path))
            parts = [paragraph.text for paragraph in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    parts.append("\t".join(cell.text for cell in row.cells))
        except Exception as e:
            raise DocumentExtractionError(
                f"Error extracting DOCX text from {path.name}", cause=e, context={"path": str(path)}
            ) from e

        text = "\n\n".join(part for part in parts if part.strip())
        logger.info("Extracted %d characters from %s", len(text), path.name)
        return text


def default_extractors() -> dict[str, DocumentExtractorPort]:
    """Extractor per supported file suffix."""
    text = TextFileExtractor()
    return {
        ".md": text,
        ".markdown": text,
        ".txt": text,
        ".pdf": PdfExtractor(),
        ".docx": DocxExtractor(),
    }
