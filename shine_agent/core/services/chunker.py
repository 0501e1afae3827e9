"""Split knowledge documents into retrievable chunks.

Two strategies, picked by file suffix:

* Markdown-like text is split on headers (``#`` to ``###``). A section with
  several substantial paragraphs becomes one chunk per paragraph; a section
  with a single one stays whole.
* Text extracted from PDF/DOCX files has no reliable headers, so it is split on
  blank lines, and long sections are regrouped three sentences at a time.

Chunk ids are ``{filename}_{section}[_{sub}]`` so re-processing a document
reproduces the same ids.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from ..domain import Chunk
from ..domain.utils import normalize_text

BINARY_SUFFIXES = {".pdf": "pdf", ".docx": "docx"}

# Markdown thresholds
MIN_PARAGRAPH_LENGTH = 50

# Binary-derived thresholds
MIN_BINARY_SECTION_LENGTH = 100
LONG_SECTION_LENGTH = 1000
MAX_TITLE_LENGTH = 100
MIN_SENTENCE_LENGTH = 50
MIN_GROUP_LENGTH = 50
SENTENCES_PER_CHUNK = 3

_HEADER_SPLIT = re.compile(r"(?=^#{1,3}\s)", re.MULTILINE)
_HEADER_TITLE = re.compile(r"^#{1,3}\s(.+)$", re.MULTILINE)
_BLANK_LINE = re.compile(r"\n\s*\n")
_SENTENCE_END = re.compile(r"[.!?]+\s+")


def chunk_document(text: str, filename: str) -> list[Chunk]:
    """Split a document into chunks tagged with their source.

    Args:
        text: Full document text (already extracted for PDF/DOCX files).
        filename: Source file name, used for ids and metadata.

    Returns:
        Chunks in document order. Empty when nothing in the document reaches
        the minimum length thresholds.
    """
    clean = normalize_text(text)
    if not clean.strip():
        return []

    kind = BINARY_SUFFIXES.get(PurePath(filename).suffix.lower())
    if kind:
        return _chunk_extracted_text(clean, filename, kind)
    return _chunk_markdown(clean, filename)


def _chunk_markdown(text: str, filename: str) -> list[Chunk]:
    chunks: list[Chunk] = []

    sections = _HEADER_SPLIT.split(text)
    # A header at offset 0 yields an empty first fragment; section indices start at that header
    if sections and not sections[0]:
        sections = sections[1:]

    for index, section in enumerate(sections):
        if not section.strip():
            continue

        title_match = _HEADER_TITLE.search(section)
        title = title_match.group(1).strip() if title_match else f"Section {index + 1}"

        paragraphs = [p for p in section.split("\n\n") if len(p.strip()) > MIN_PARAGRAPH_LENGTH]

        if not paragraphs:
            continue

        if len(paragraphs) == 1:
            chunks.append(
                Chunk(
                    chunk_id=f"{filename}_{index}",
                    content=section.strip(),
                    metadata={"source": filename, "section": title, "type": "section"},
                )
            )
            continue

        for p_index, paragraph in enumerate(paragraphs):
            chunks.append(
                Chunk(
                    chunk_id=f"{filename}_{index}_{p_index}",
                    content=paragraph.strip(),
                    metadata={"source": filename, "section": title, "type": "paragraph"},
                )
            )

    return chunks


def _chunk_extracted_text(text: str, filename: str, kind: str) -> list[Chunk]:
    chunks: list[Chunk] = []
    sections = [s.strip() for s in _BLANK_LINE.split(text) if len(s.strip()) > MIN_BINARY_SECTION_LENGTH]

    for index, section in enumerate(sections):
        first_line = section.split("\n", 1)[0].strip()
        title = first_line if len(first_line) < MAX_TITLE_LENGTH else f"Section {index + 1}"

        if len(section) <= LONG_SECTION_LENGTH:
            chunks.append(
                Chunk(
                    chunk_id=f"{filename}_{index}",
                    content=section,
                    metadata={"source": filename, "section": title, "type": f"{kind}_section"},
                )
            )
            continue

        sentences = [s.strip() for s in _SENTENCE_END.split(section) if len(s.strip()) > MIN_SENTENCE_LENGTH]
        for start in range(0, len(sentences), SENTENCES_PER_CHUNK):
            content = ". ".join(sentences[start : start + SENTENCES_PER_CHUNK]).strip()
            if len(content) <= MIN_GROUP_LENGTH:
                continue
            chunks.append(
                Chunk(
                    chunk_id=f"{filename}_{index}_{start // SENTENCES_PER_CHUNK}",
                    content=content,
                    metadata={
                        "source": filename,
                        "section": title,
                        "type": f"{kind}_chunk",
                        "page_section": index + 1,
                    },
                )
            )

    return chunks
