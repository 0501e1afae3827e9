"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import pytest

from shine_agent.adapters.outbound.vector_store.memory_adapter import InMemoryKnowledgeStore
from shine_agent.core.domain import ChatMessage
from shine_agent.core.ports import ChatCompletionPort, EmbeddingPort, PersonaSourcePort
from shine_agent.core.services import Embedder


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP app, fake backends)")


class KeywordEmbedding(EmbeddingPort):
    """Deterministic embedding: one dimension per vocabulary word, plus a bias.

    Texts sharing vocabulary words point in similar directions, which is all
    similarity search needs. Texts containing a ``fail_on`` marker raise.
    """

    VOCABULARY = ("business", "code", "strategy", "debug", "grant", "startup", "python", "team")

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.fail_on = fail_on
        self.queries: list[str] = []
        self.documents: list[str] = []

    def _vector(self, text: str) -> list[float]:
        if any(marker in text for marker in self.fail_on):
            raise RuntimeError("embedding service unavailable")
        lower = text.lower()
        return [float(lower.count(word)) for word in self.VOCABULARY] + [0.1]

    def embed_query(self, text: str) -> list[float]:
        self.queries.append(text)
        return self._vector(text)

    def embed_document(self, text: str) -> list[float]:
        self.documents.append(text)
        return self._vector(text)


class DictPersonaSource(PersonaSourcePort):
    def __init__(self, documents: dict[str, str]) -> None:
        self.documents = documents
        self.loaded: list[str] = []

    def load(self, name: str) -> str:
        self.loaded.append(name)
        if name not in self.documents:
            raise FileNotFoundError(name)
        return self.documents[name]


class ScriptedLLM(ChatCompletionPort):
    """Chat-completion fake returning scripted replies in order.

    A reply that is an exception instance is raised instead of returned.
    Once the script runs out, the last reply repeats.
    """

    def __init__(self, *replies) -> None:
        self.replies = list(replies) or ["Hey! Build. Ship. Learn. Repeat."]
        self.calls: list[dict] = []

    def complete(
        self,
        messages: list[ChatMessage],
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        self.calls.append(
            {"messages": list(messages), "max_tokens": max_tokens, "temperature": temperature}
        )
        reply = self.replies[min(len(self.calls), len(self.replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def keyword_embedding():
    return KeywordEmbedding()


@pytest.fixture
def embedder(keyword_embedding):
    return Embedder(keyword_embedding)


@pytest.fixture
def memory_store():
    return InMemoryKnowledgeStore()


@pytest.fixture
def scripted_llm():
    """Factory for ScriptedLLM fakes."""
    return ScriptedLLM


@pytest.fixture
def persona_source():
    return DictPersonaSource(
        {
            "biography.md": "# Biography\n\nTee Shine is a software engineer.",
            "tone.md": "# Tone\n\nDirect and authentic.",
        }
    )


BUSINESS_DOC = """# Business Expertise

## Grant Programs

The foundation gives a business grant to a thousand entrepreneurs across many countries.

## Strategy

Start every business strategy with the customer's real pain, then validate it cheaply.

## Team

A startup team that ships weekly learns faster than a team that plans for months.
"""

TECH_DOC = """Write Python code that a teammate can read on a Monday morning without coffee.

When you debug code, read the error first, then recreate the bug and isolate the cause.
"""


@pytest.fixture
def knowledge_dir(tmp_path: Path) -> Path:
    """Knowledge directory with one sectioned and one header-less document."""
    directory = tmp_path / "knowledge"
    directory.mkdir()
    (directory / "business_expertise.md").write_text(BUSINESS_DOC, encoding="utf-8")
    (directory / "technical_expertise.md").write_text(TECH_DOC, encoding="utf-8")
    return directory
