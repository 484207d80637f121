"""OpenAI Assistants client wrapper and integration layer.

This package provides an async client wrapper for the Assistants API along
with plain dataclasses describing assistants, files, runs, and messages.
"""

from assistant_relay.assistants.client import AssistantsClient
from assistant_relay.assistants.types import (
    AssistantInfo,
    FileInfo,
    RunInfo,
    ThreadMessage,
)

__all__ = ["AssistantsClient", "AssistantInfo", "FileInfo", "RunInfo", "ThreadMessage"]
