"""Shine agent: persona-driven chat assistant with a small RAG pipeline."""

__version__ = "1.0.0"
