"""Unit tests for the Gemini embedding and chat adapters.

The genai client is replaced with a MagicMock; ``time.sleep`` is patched so
retry backoff does not slow the suite down.
"""

from unittest.mock import MagicMock, patch

import pytest
from google.genai import errors

from shine_agent.adapters.outbound.embedding.gemini_embedding import GeminiEmbeddingAdapter
from shine_agent.adapters.outbound.llm.gemini_llm import GeminiChatAdapter
from shine_agent.core.domain import ChatMessage, Role
from shine_agent.core.domain.exceptions import (
    EmbeddingAPIError,
    EmbeddingRateLimitError,
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    MissingAPIKeyError,
)

pytestmark = pytest.mark.unit


def _api_error(code: int) -> errors.APIError:
    return errors.APIError(code, {"error": {"code": code, "message": "failed", "status": "ERR"}})


def _embedding_response(values):
    response = MagicMock()
    response.embeddings = [MagicMock(values=values)]
    return response


@pytest.fixture
def embedding_adapter():
    adapter = GeminiEmbeddingAdapter(api_key="fake-key", dimension=3)
    adapter._client = MagicMock()
    return adapter


@pytest.fixture
def chat_adapter():
    adapter = GeminiChatAdapter(api_key="fake-key")
    adapter._client = MagicMock()
    return adapter


class TestGeminiEmbeddingAdapter:
    def test_embed_query_uses_query_task_type(self, embedding_adapter):
        embedding_adapter._client.models.embed_content.return_value = _embedding_response(
            [0.1, 0.2, 0.3]
        )

        vector = embedding_adapter.embed_query("hello")

        assert vector == [0.1, 0.2, 0.3]
        config = embedding_adapter._client.models.embed_content.call_args.kwargs["config"]
        assert config.task_type == "RETRIEVAL_QUERY"
        assert config.output_dimensionality == 3

    def test_embed_document_uses_document_task_type(self, embedding_adapter):
        embedding_adapter._client.models.embed_content.return_value = _embedding_response([1.0])

        embedding_adapter.embed_document("chunk text")

        config = embedding_adapter._client.models.embed_content.call_args.kwargs["config"]
        assert config.task_type == "RETRIEVAL_DOCUMENT"

    def test_empty_vector_raises(self, embedding_adapter):
        embedding_adapter._client.models.embed_content.return_value = _embedding_response([])

        with pytest.raises(EmbeddingAPIError):
            embedding_adapter.embed_query("hello")

    @patch("shine_agent.adapters.outbound.embedding.gemini_embedding.time.sleep")
    def test_rate_limit_is_retried(self, mock_sleep, embedding_adapter):
        embedding_adapter._client.models.embed_content.side_effect = [
            _api_error(429),
            _embedding_response([0.5]),
        ]

        assert embedding_adapter.embed_query("hello") == [0.5]
        mock_sleep.assert_called_once_with(1)

    @patch("shine_agent.adapters.outbound.embedding.gemini_embedding.time.sleep")
    def test_persistent_rate_limit_raises(self, mock_sleep, embedding_adapter):
        embedding_adapter._client.models.embed_content.side_effect = _api_error(429)

        with pytest.raises(EmbeddingRateLimitError):
            embedding_adapter.embed_query("hello")

        assert embedding_adapter._client.models.embed_content.call_count == 3

    def test_other_api_errors_are_not_retried(self, embedding_adapter):
        embedding_adapter._client.models.embed_content.side_effect = _api_error(500)

        with pytest.raises(EmbeddingAPIError):
            embedding_adapter.embed_query("hello")

        assert embedding_adapter._client.models.embed_content.call_count == 1

    def test_missing_api_key(self):
        with pytest.raises(MissingAPIKeyError):
            GeminiEmbeddingAdapter(api_key="").embed_query("hello")


class TestGeminiChatAdapter:
    def test_system_turns_become_system_instruction(self):
        system, contents = GeminiChatAdapter._to_contents(
            [
                ChatMessage(Role.SYSTEM, "You are Tee Shine."),
                ChatMessage(Role.USER, "Hi"),
                ChatMessage(Role.ASSISTANT, "What's up?"),
            ]
        )

        assert system == "You are Tee Shine."
        assert [c.role for c in contents] == ["user", "model"]
        assert contents[1].parts[0].text == "What's up?"

    def test_complete_returns_text(self, chat_adapter):
        response = MagicMock()
        response.candidates = [MagicMock()]
        response.text = "Build. Ship. Learn. Repeat."
        chat_adapter._client.models.generate_content.return_value = response

        text = chat_adapter.complete(
            [ChatMessage(Role.SYSTEM, "persona"), ChatMessage(Role.USER, "motivate me")],
            max_tokens=200,
            temperature=0.3,
        )

        assert text == "Build. Ship. Learn. Repeat."
        config = chat_adapter._client.models.generate_content.call_args.kwargs["config"]
        assert config.system_instruction == "persona"
        assert config.max_output_tokens == 200
        assert config.temperature == 0.3

    def test_no_candidates_raises(self, chat_adapter):
        response = MagicMock()
        response.candidates = []
        chat_adapter._client.models.generate_content.return_value = response

        with pytest.raises(LLMGenerationError):
            chat_adapter.complete([ChatMessage(Role.USER, "hello")])

    @patch("shine_agent.adapters.outbound.llm.gemini_llm.time.sleep")
    def test_persistent_rate_limit_raises(self, mock_sleep, chat_adapter):
        chat_adapter._client.models.generate_content.side_effect = _api_error(429)

        with pytest.raises(LLMRateLimitError):
            chat_adapter.complete([ChatMessage(Role.USER, "hello")])

        assert mock_sleep.call_count == 2

    def test_network_failure_raises_connection_error(self, chat_adapter):
        chat_adapter._client.models.generate_content.side_effect = TimeoutError("slow")

        with pytest.raises(LLMConnectionError):
            chat_adapter.complete([ChatMessage(Role.USER, "hello")])

    def test_missing_api_key(self):
        with pytest.raises(MissingAPIKeyError):
            GeminiChatAdapter(api_key="").complete([ChatMessage(Role.USER, "hello")])
