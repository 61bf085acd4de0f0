"""
Conversation store interface.

Conversations and their messages live in an external store; the chat
service only depends on this protocol. Messages are returned oldest first.

Dependencies: legally.models.chat
System role: Conversation persistence boundary
"""

import re
from typing import Protocol

from legally.models.chat import ChatMessageRecord, ConversationRecord

TITLE_MAX_LENGTH = 50


def generate_conversation_title(first_message: str) -> str:
    """
    Derive a conversation title from its first user message.

    Whitespace runs collapse to one space; titles longer than 50 characters
    are cut and end with "...".
    """
    cleaned = re.sub(r"\s+", " ", first_message.strip())
    if len(cleaned) <= TITLE_MAX_LENGTH:
        return cleaned
    return cleaned[:TITLE_MAX_LENGTH].strip() + "..."


class ConversationStore(Protocol):
    """Persistence for conversations and their messages."""

    async def create_conversation(self, owner_id: str, title: str) -> ConversationRecord: ...

    async def get_conversations(self, owner_id: str) -> list[ConversationRecord]: ...

    async def get_conversation(self, conversation_id: str) -> ConversationRecord | None: ...

    async def update_title(self, conversation_id: str, title: str) -> None: ...

    async def delete_conversation(self, conversation_id: str) -> bool: ...

    async def get_messages(self, conversation_id: str) -> list[ChatMessageRecord]: ...

    async def add_message(self, conversation_id: str, role: str, content: str) -> ChatMessageRecord: ...
