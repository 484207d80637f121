"""Conversation session management for assistant-relay.

This package provides the session that fans a user message out to the
selected assistants on one shared thread, and the poller that waits for each
assistant's run to finish.
"""

from assistant_relay.sessions.poller import PollPolicy, PollResult, PollState, RunPoller
from assistant_relay.sessions.session import ConversationSession
from assistant_relay.sessions.types import (
    AgentReply,
    SessionOutcome,
    SessionState,
    Turn,
)

__all__ = [
    # Core classes
    "ConversationSession",
    "RunPoller",
    # Polling types
    "PollPolicy",
    "PollResult",
    "PollState",
    # Session types
    "AgentReply",
    "SessionOutcome",
    "SessionState",
    "Turn",
]
