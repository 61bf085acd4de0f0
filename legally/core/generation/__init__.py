"""
Generation module.

Prompt construction, the streaming gateway client and the answer
assembler used for chat and document analysis.
"""

from legally.core.generation.answer_assembler import StreamingAnswerAssembler
from legally.core.generation.gateway_client import GenerationClient, get_generation_client

__all__ = ["GenerationClient", "StreamingAnswerAssembler", "get_generation_client"]
