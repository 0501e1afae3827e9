"""Configuration management for the Shine agent."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PERSONA_DOCUMENTS = [
    "tee_shine_biography.md",
    "business_expertise.md",
    "technical_expertise.md",
    "problem_solving_methods.md",
    "tee_shine_tone_guidelines.md",
    "core_identity.md",
]


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets copied from dashboards or mounted by a platform sometimes carry a
    BOM that breaks HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google AI API (embeddings + chat)
    google_api_key: str = ""

    # Qdrant settings
    qdrant_url: str = ""
    qdrant_api_key: str = ""
    qdrant_collection: str = "knowledge_chunks"

    # "memory" keeps chunks in-process (local development, no Qdrant needed)
    vector_backend: Literal["qdrant", "memory"] = "qdrant"

    @field_validator("google_api_key", "qdrant_api_key", "qdrant_url", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Model settings
    llm_model: str = "gemini-2.0-flash"
    embedding_model: str = "gemini-embedding-001"
    embedding_dimension: int = 768
    llm_requests_per_minute: int | None = 15
    embedding_requests_per_minute: int | None = 60
    request_timeout_seconds: float = 30.0

    # Knowledge and persona
    knowledge_dir: Path = Path("./knowledge")
    persona_dir: Path = Path("./knowledge")
    persona_name: str = "Tee Shine (Olanrewaju Shinaayomi)"
    persona_documents: list[str] = DEFAULT_PERSONA_DOCUMENTS

    # RAG settings
    similarity_threshold: float = 0.7
    context_top_k: int = 3
    search_top_k: int = 5
    upsert_batch_size: int = 10

    # Generation settings
    response_max_tokens: int = 1000
    response_temperature: float = 0.7
    guide_max_tokens: int = 800
    guide_temperature: float = 0.5

    # Response cache
    cache_ttl_seconds: float = 300.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    @property
    def request_timeout_ms(self) -> int:
        """Request timeout in milliseconds (google-genai expects ms)."""
        return int(self.request_timeout_seconds * 1000)


# Global settings instance
settings = Settings()
