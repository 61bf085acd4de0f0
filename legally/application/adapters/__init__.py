"""Supporting adapters."""

from .conversation_store import ConversationStore, generate_conversation_title

__all__ = ["ConversationStore", "generate_conversation_title"]
