"""
Application configuration.

One pydantic-settings class per concern, aggregated by Settings and
cached by get_settings().
"""

from legally.configs.database import DatabaseSettings
from legally.configs.generation import GenerationSettings
from legally.configs.rag import RAGSettings
from legally.configs.settings import Settings, get_settings
from legally.configs.vector_store import VectorStoreSettings

__all__ = [
    "DatabaseSettings",
    "GenerationSettings",
    "RAGSettings",
    "Settings",
    "VectorStoreSettings",
    "get_settings",
]
