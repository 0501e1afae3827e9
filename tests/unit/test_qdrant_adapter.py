"""Unit tests for QdrantKnowledgeStore.

The Qdrant client is replaced by a MagicMock so no cluster is needed.
"""

from unittest.mock import MagicMock

import pytest

from shine_agent.adapters.outbound.vector_store.qdrant_adapter import (
    VECTOR_NAME,
    QdrantKnowledgeStore,
    point_id_for,
)
from shine_agent.core.domain import Chunk
from shine_agent.core.domain.exceptions import (
    StoreConnectionError,
    StoreQueryError,
    StoreWriteError,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def client():
    mock = MagicMock()
    mock.collection_exists.return_value = True
    return mock


@pytest.fixture
def store(client):
    store = QdrantKnowledgeStore(
        url="https://example.qdrant.io",
        api_key="test-key",
        collection_name="test_chunks",
        dimension=3,
    )
    store._client = client
    return store


def _chunk(chunk_id: str, embedding=(0.1, 0.2, 0.3)) -> Chunk:
    return Chunk(
        chunk_id=chunk_id,
        content=f"content {chunk_id}",
        metadata={"source": "doc.md", "section": "Intro", "type": "section"},
        embedding=list(embedding) if embedding else None,
    )


def _hit(score: float, position: int, source: str = "doc.md"):
    hit = MagicMock()
    hit.score = score
    hit.payload = {
        "chunk_id": f"{source}_{position}",
        "content": f"content at {position}",
        "metadata": {"source": source},
        "position": position,
    }
    return hit


class TestPointIds:
    def test_point_id_is_deterministic(self):
        assert point_id_for("doc.md_1") == point_id_for("doc.md_1")
        assert point_id_for("doc.md_1") != point_id_for("doc.md_2")


class TestUpsert:
    def test_writes_in_batches(self, store, client):
        chunks = [_chunk(f"doc.md_{i}") for i in range(25)]

        written = store.upsert(chunks, batch_size=10)

        assert written == 25
        assert client.upsert.call_count == 3
        batch_sizes = [len(c.kwargs["points"]) for c in client.upsert.call_args_list]
        assert batch_sizes == [10, 10, 5]

    def test_point_payload_and_vector(self, store, client):
        store.upsert([_chunk("doc.md_1")])

        point = client.upsert.call_args.kwargs["points"][0]
        assert str(point.id) == point_id_for("doc.md_1")
        assert point.vector == {VECTOR_NAME: [0.1, 0.2, 0.3]}
        assert point.payload["chunk_id"] == "doc.md_1"
        assert point.payload["content"] == "content doc.md_1"
        assert point.payload["metadata"]["source"] == "doc.md"
        assert point.payload["position"] == 0

    def test_chunk_without_embedding_is_stored_without_vector(self, store, client):
        store.upsert([_chunk("doc.md_1", embedding=None)])

        point = client.upsert.call_args.kwargs["points"][0]
        assert point.vector == {}

    def test_positions_continue_across_batches(self, store, client):
        store.upsert([_chunk(f"doc.md_{i}") for i in range(3)], batch_size=2)

        positions = [
            point.payload["position"]
            for call in client.upsert.call_args_list
            for point in call.kwargs["points"]
        ]
        assert positions == [0, 1, 2]

    def test_empty_upsert_skips_client(self, store, client):
        assert store.upsert([]) == 0
        client.upsert.assert_not_called()

    def test_failed_batch_raises_write_error(self, store, client):
        client.upsert.side_effect = RuntimeError("connection reset")

        with pytest.raises(StoreWriteError) as exc_info:
            store.upsert([_chunk("doc.md_1")])

        assert exc_info.value.extra_context["batch"] == 1


class TestClear:
    def test_clear_recreates_collection(self, store, client):
        client.collection_exists.return_value = False

        store.clear()

        client.delete_collection.assert_called_once_with(collection_name="test_chunks")
        client.create_collection.assert_called_once()
        vectors_config = client.create_collection.call_args.kwargs["vectors_config"]
        assert vectors_config[VECTOR_NAME].size == 3

    def test_clear_resets_positions(self, store, client):
        store.upsert([_chunk("doc.md_0"), _chunk("doc.md_1")])
        store.clear()
        store.upsert([_chunk("doc.md_0")])

        assert client.upsert.call_args.kwargs["points"][0].payload["position"] == 0

    def test_clear_failure_raises_write_error(self, store, client):
        client.delete_collection.side_effect = RuntimeError("forbidden")

        with pytest.raises(StoreWriteError):
            store.clear()


class TestSearch:
    def test_search_maps_points_to_results(self, store, client):
        client.query_points.return_value.points = [_hit(0.92, 0), _hit(0.81, 1)]

        results = store.search([0.1, 0.2, 0.3], threshold=0.7, limit=2)

        assert [r.similarity for r in results] == [0.92, 0.81]
        assert results[0].content == "content at 0"
        assert results[0].source == "doc.md"
        kwargs = client.query_points.call_args.kwargs
        assert kwargs["using"] == VECTOR_NAME
        assert kwargs["score_threshold"] == 0.7
        assert kwargs["limit"] == 2

    def test_equal_scores_keep_insertion_order(self, store, client):
        client.query_points.return_value.points = [_hit(0.9, 5, "b.md"), _hit(0.9, 2, "a.md")]

        results = store.search([0.1, 0.2, 0.3])

        assert [r.source for r in results] == ["a.md", "b.md"]

    def test_non_positive_limit_is_rejected(self, store, client):
        with pytest.raises(ValueError):
            store.search([0.1, 0.2, 0.3], limit=0)

        client.query_points.assert_not_called()

    def test_search_failure_raises_query_error(self, store, client):
        client.query_points.side_effect = RuntimeError("timeout")

        with pytest.raises(StoreQueryError):
            store.search([0.1, 0.2, 0.3])


class TestCount:
    def test_count(self, store, client):
        client.count.return_value.count = 42

        assert store.count() == 42

    def test_count_failure(self, store, client):
        client.count.side_effect = RuntimeError("down")

        with pytest.raises(StoreQueryError):
            store.count()


class TestConnection:
    def test_connection_failure_raises(self, monkeypatch):
        import qdrant_client

        def failing_client(*args, **kwargs):
            raise RuntimeError("unreachable")

        monkeypatch.setattr(qdrant_client, "QdrantClient", failing_client)
        store = QdrantKnowledgeStore(url="https://nowhere.invalid", api_key="k")

        with pytest.raises(StoreConnectionError):
            store.count()

    def test_positions_resume_after_existing_points(self, monkeypatch, client):
        import qdrant_client

        client.count.return_value.count = 7
        monkeypatch.setattr(qdrant_client, "QdrantClient", lambda *args, **kwargs: client)
        store = QdrantKnowledgeStore(url="https://example.qdrant.io", api_key="k")

        store.upsert([_chunk("doc.md_0"), _chunk("doc.md_1")])

        positions = [p.payload["position"] for p in client.upsert.call_args.kwargs["points"]]
        assert positions == [7, 8]
        client.count.assert_called_once_with(collection_name="knowledge_chunks", exact=True)
