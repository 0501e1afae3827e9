"""Unit tests for KnowledgeService, run end-to-end over the in-memory store."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from shine_agent.adapters.outbound.extractors.document_extractors import default_extractors
from shine_agent.core.domain.exceptions import (
    EmptyKnowledgeBaseError,
    EmptyQueryError,
    KnowledgeDirectoryNotFoundError,
    StoreQueryError,
)
from shine_agent.core.services import Embedder, KnowledgeService

pytestmark = pytest.mark.unit


@pytest.fixture
def service(embedder, memory_store):
    return KnowledgeService(embedder, memory_store, default_extractors(), threshold=0.7)


class TestProcessKnowledgeBase:
    def test_processes_every_document(self, service, knowledge_dir, memory_store):
        report = service.process_knowledge_base(knowledge_dir)

        # three single-paragraph sections + two paragraphs of a header-less doc
        assert report.chunks_processed == 5
        assert report.sources == ["business_expertise.md", "technical_expertise.md"]
        assert report.embedded == 5
        assert report.skipped_files == []
        assert memory_store.count() == 5
        assert memory_store.get("business_expertise.md_1").metadata["section"] == "Grant Programs"
        assert memory_store.get("technical_expertise.md_0_1").chunk_type == "paragraph"

    def test_reprocessing_drops_removed_documents(self, service, knowledge_dir, memory_store):
        service.process_knowledge_base(knowledge_dir)
        (knowledge_dir / "technical_expertise.md").unlink()

        report = service.process_knowledge_base(knowledge_dir)

        assert report.sources == ["business_expertise.md"]
        assert memory_store.count() == 3
        assert memory_store.get("technical_expertise.md_0_0") is None

    def test_reprocessing_is_stable(self, service, knowledge_dir, memory_store):
        first = service.process_knowledge_base(knowledge_dir)
        second = service.process_knowledge_base(knowledge_dir)

        assert first == second
        assert memory_store.count() == 5

    def test_failed_embeddings_are_stored_but_counted(self, memory_store, knowledge_dir):
        port = MagicMock()
        port.embed_document.side_effect = [[1.0, 0.0]] * 4 + [RuntimeError("quota")]
        service = KnowledgeService(Embedder(port), memory_store, default_extractors())

        report = service.process_knowledge_base(knowledge_dir)

        assert report.chunks_processed == 5
        assert report.embedded == 4
        assert report.failed_embeddings == 1
        assert memory_store.get("technical_expertise.md_0_1").embedding is None

    def test_unsupported_and_unreadable_files(self, service, knowledge_dir):
        (knowledge_dir / "notes.csv").write_text("a,b,c", encoding="utf-8")
        (knowledge_dir / "broken.md").write_bytes(b"\xff\xfe\xfa invalid utf-8 \x80")
        (knowledge_dir / "empty.txt").write_text("   ", encoding="utf-8")

        report = service.process_knowledge_base(knowledge_dir)

        assert "notes.csv" not in report.sources
        assert sorted(report.skipped_files) == ["broken.md", "empty.txt"]
        assert report.chunks_processed == 5

    def test_missing_directory(self, service, tmp_path):
        with pytest.raises(KnowledgeDirectoryNotFoundError):
            service.process_knowledge_base(tmp_path / "nope")

    def test_no_chunks_leaves_store_untouched(self, service, tmp_path, memory_store, knowledge_dir):
        service.process_knowledge_base(knowledge_dir)
        empty_dir = tmp_path / "tiny"
        empty_dir.mkdir()
        (empty_dir / "short.md").write_text("# Hi\n\nToo short.", encoding="utf-8")

        with pytest.raises(EmptyKnowledgeBaseError):
            service.process_knowledge_base(empty_dir)

        assert memory_store.count() == 5

    def test_uses_configured_batch_size(self, embedder, knowledge_dir):
        store = MagicMock()
        store.upsert.return_value = 5
        service = KnowledgeService(embedder, store, default_extractors(), batch_size=2)

        service.process_knowledge_base(knowledge_dir)

        store.clear.assert_called_once()
        assert store.upsert.call_args.kwargs["batch_size"] == 2


class TestExtractorFor:
    def test_picks_extractor_by_suffix(self, service):
        assert service.extractor_for(Path("notes.md")) is service.extractors[".md"]
        assert service.extractor_for(Path("REPORT.PDF")) is service.extractors[".pdf"]
        assert service.extractor_for(Path("plan.docx")) is service.extractors[".docx"]

    def test_unsupported_suffix(self, service):
        assert service.extractor_for(Path("photo.png")) is None
        assert service.extractor_for(Path("Makefile")) is None

    def test_custom_extractors_are_case_insensitive(self, embedder, memory_store):
        extractor = MagicMock()
        service = KnowledgeService(embedder, memory_store, {".TXT": extractor})

        assert service.extractor_for(Path("a.txt")) is extractor
        assert service.supported_suffixes == {".txt"}


class TestDescribeKnowledgeBase:
    def test_reports_files_and_chunks_without_embedding(self, service, knowledge_dir, keyword_embedding):
        status = service.describe_knowledge_base(knowledge_dir)

        assert status.available_files == ["business_expertise.md", "technical_expertise.md"]
        assert status.total_chunks == 5
        assert status.status == "ready"
        assert keyword_embedding.documents == []


class TestSearchKnowledge:
    def test_finds_relevant_chunk(self, service, knowledge_dir):
        service.process_knowledge_base(knowledge_dir)

        results = service.search_knowledge("how do I debug python code?", limit=5)

        assert results
        assert results[0].source == "technical_expertise.md"
        assert all(r.similarity >= 0.7 for r in results)
        assert [r.similarity for r in results] == sorted(
            (r.similarity for r in results), reverse=True
        )

    def test_limit(self, embedder, memory_store, knowledge_dir):
        service = KnowledgeService(embedder, memory_store, default_extractors(), threshold=-1.0)
        service.process_knowledge_base(knowledge_dir)

        assert len(service.search_knowledge("business", limit=2)) == 2

    def test_empty_query_is_rejected(self, service):
        with pytest.raises(EmptyQueryError):
            service.search_knowledge("  ")

    def test_store_errors_propagate(self, embedder):
        store = MagicMock()
        store.search.side_effect = StoreQueryError("down")
        service = KnowledgeService(embedder, store, default_extractors())

        with pytest.raises(StoreQueryError):
            service.search_knowledge("business")
