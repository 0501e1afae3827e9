"""FastAPI dependencies, backed by the composition root singletons."""

from ....composition.container import (
    get_chat_service,
    get_knowledge_service,
    get_knowledge_store,
)
from ....config.settings import Settings, settings


def get_settings() -> Settings:
    return settings


__all__ = ["get_chat_service", "get_knowledge_service", "get_knowledge_store", "get_settings"]
