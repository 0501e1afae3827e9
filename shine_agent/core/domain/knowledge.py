"""Models describing knowledge-processing runs."""

from dataclasses import dataclass, field


@dataclass
class ProcessingReport:
    """Outcome of a full chunk -> embed -> store run.

    Attributes:
        chunks_processed: Number of chunks written to the store.
        sources: File names that produced at least one chunk, in processing order.
        embedded: Number of chunks stored with a vector.
        skipped_files: Files that could not be extracted or produced no text.
    """

    chunks_processed: int
    sources: list[str]
    embedded: int = 0
    skipped_files: list[str] = field(default_factory=list)

    @property
    def failed_embeddings(self) -> int:
        return self.chunks_processed - self.embedded


@dataclass
class KnowledgeStatus:
    """What a processing run would pick up from a directory, without embedding."""

    available_files: list[str]
    total_chunks: int
    status: str = "ready"
