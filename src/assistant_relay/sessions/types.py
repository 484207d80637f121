"""Data types for conversation sessions.

This module defines the session lifecycle states, the outcome a session
reports to the controller, and the records describing one turn.
"""

from dataclasses import dataclass, field
from enum import Enum

from assistant_relay.assistants import AssistantInfo


class SessionState(str, Enum):
    """Lifecycle of a ConversationSession."""

    IDLE = "idle"  # no thread yet
    ACTIVE = "active"  # thread created, accepting turns
    ENDED = "ended"


class SessionOutcome(str, Enum):
    """Why a session ended, as reported to the controller."""

    EXIT = "exit"  # terminate the program
    RESELECT = "reselect"  # clear the selection and choose again


@dataclass
class AgentReply:
    """What one assistant produced for one turn.

    Exactly one of ``text`` and ``notice`` is set: ``text`` holds the
    assistant's answer, ``notice`` the message shown instead of an answer.
    """

    assistant: AssistantInfo
    run_id: str
    status: str
    text: str | None = None
    notice: str | None = None

    @property
    def answered(self) -> bool:
        return self.text is not None


@dataclass
class Turn:
    """One user message and the replies it received, in selection order."""

    user_input: str
    replies: list[AgentReply] = field(default_factory=list)
