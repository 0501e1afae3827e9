"""Use-case service for building and searching the knowledge base."""

from __future__ import annotations

import logging
from pathlib import Path

from ..domain import Chunk, KnowledgeStatus, ProcessingReport, SearchResult
from ..domain.exceptions import (
    EmptyKnowledgeBaseError,
    EmptyQueryError,
    KnowledgeDirectoryNotFoundError,
)
from ..ports.extractor_port import DocumentExtractorPort
from ..ports.vector_store_port import (
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_UPSERT_BATCH_SIZE,
    KnowledgeStorePort,
)
from .chunker import chunk_document
from .embedder import Embedder

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5


class KnowledgeService:
    """Processes a knowledge directory into the store and searches it.

    A processing run is all-or-nothing with respect to the store: the store is
    cleared and fully repopulated, so chunks of files removed from the
    directory disappear, and two processing generations are never mixed.
    Only individual chunk embeddings and unreadable files are tolerated.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: KnowledgeStorePort,
        extractors: dict[str, DocumentExtractorPort],
        *,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        batch_size: int = DEFAULT_UPSERT_BATCH_SIZE,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.extractors = {suffix.lower(): extractor for suffix, extractor in extractors.items()}
        self.threshold = threshold
        self.batch_size = batch_size

    @property
    def supported_suffixes(self) -> set[str]:
        return set(self.extractors)

    def extractor_for(self, path: Path) -> DocumentExtractorPort | None:
        """Extractor registered for the file's suffix (case-insensitive), or None."""
        return self.extractors.get(path.suffix.lower())

    def _knowledge_files(self, directory: Path) -> list[Path]:
        if not directory.is_dir():
            raise KnowledgeDirectoryNotFoundError(
                f"Knowledge directory not found: {directory}",
                context={"directory": str(directory)},
            )
        return sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and self.extractor_for(path) is not None
        )

    def _load_chunks(self, directory: Path) -> tuple[list[Chunk], list[str]]:
        """Extract and chunk every supported file; returns (chunks, skipped files)."""
        chunks: list[Chunk] = []
        skipped: list[str] = []

        for path in self._knowledge_files(directory):
            extractor = self.extractor_for(path)
            try:
                text = extractor.extract(path)
            except Exception as e:
                logger.error("Could not extract text from %s, skipping: %s", path.name, e)
                skipped.append(path.name)
                continue

            if not text.strip():
                logger.warning("No text extracted from %s, skipping", path.name)
                skipped.append(path.name)
                continue

            file_chunks = chunk_document(text, path.name)
            logger.info("Created %d chunks from %s", len(file_chunks), path.name)
            chunks.extend(file_chunks)

        return chunks, skipped

    def process_knowledge_base(self, directory: Path | str) -> ProcessingReport:
        """Run the full chunk -> embed -> store pipeline over ``directory``.

        Raises:
            KnowledgeDirectoryNotFoundError: If the directory does not exist.
            EmptyKnowledgeBaseError: If no file produced a chunk; the store is
                left untouched in that case.
            KnowledgeStoreError: If clearing or writing the store fails.
        """
        directory = Path(directory)
        logger.info("Starting knowledge processing in %s", directory)

        chunks, skipped = self._load_chunks(directory)
        if not chunks:
            raise EmptyKnowledgeBaseError(
                f"No knowledge chunks could be created from {directory}",
                context={"directory": str(directory), "skipped_files": skipped},
            )

        embedded_chunks = self.embedder.embed_batch(chunks)

        self.store.clear()
        written = self.store.upsert(embedded_chunks, batch_size=self.batch_size)

        sources = list(dict.fromkeys(chunk.source for chunk in embedded_chunks))
        report = ProcessingReport(
            chunks_processed=written,
            sources=sources,
            embedded=sum(1 for chunk in embedded_chunks if chunk.embedding is not None),
            skipped_files=skipped,
        )
        logger.info(
            "Knowledge processing complete: %d chunks from %d sources (%d without embedding)",
            report.chunks_processed,
            len(report.sources),
            report.failed_embeddings,
        )
        return report

    def describe_knowledge_base(self, directory: Path | str) -> KnowledgeStatus:
        """Report which files a processing run would use and how many chunks they yield."""
        chunks, _ = self._load_chunks(Path(directory))
        return KnowledgeStatus(
            available_files=list(dict.fromkeys(chunk.source for chunk in chunks)),
            total_chunks=len(chunks),
        )

    def search_knowledge(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        """Similarity search for ``query``.

        Unlike context assembly, failures propagate so callers can tell
        "no matches" from "store unavailable".
        """
        if not query or not query.strip():
            raise EmptyQueryError("Query cannot be empty or whitespace only")

        vector = self.embedder.embed(query)
        return self.store.search(vector, threshold=self.threshold, limit=limit)
