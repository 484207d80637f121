"""Type definitions for the OpenAI Assistants integration.

This module contains dataclasses used for representing assistants, their
attached files, runs, and thread messages independently of the SDK objects.
"""

from dataclasses import dataclass, field
from typing import Any

# Run statuses as reported by the Assistants API.
RUN_COMPLETED = "completed"
RUN_PENDING_STATUSES = frozenset({"queued", "in_progress", "cancelling"})
# requires_action is terminal here because tool outputs are never submitted.
RUN_FAILED_STATUSES = frozenset(
    {"requires_action", "cancelled", "failed", "expired", "incomplete"}
)


def get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Get a value from either an object attribute or a dict key."""
    if isinstance(obj, dict):
        value = obj.get(key)
    else:
        value = getattr(obj, key, None) if obj is not None else None
    return default if value is None else value


@dataclass(frozen=True)
class AssistantInfo:
    """A remote assistant the user can talk to.

    Attributes:
        id: Opaque assistant identifier (e.g., "asst_abc123")
        name: Display name, may be empty
        file_ids: Ordered ids of the files attached to the assistant
    """

    id: str
    name: str = ""
    file_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        """Name shown on the console, falling back to the id."""
        return self.name or self.id

    @staticmethod
    def from_openai_assistant(assistant: Any) -> "AssistantInfo":
        """Create an AssistantInfo from an SDK assistant object.

        Older assistants carry their files in ``file_ids``; current ones keep
        them under ``tool_resources.code_interpreter.file_ids``.

        Args:
            assistant: Assistant object or dict from the Assistants API

        Returns:
            AssistantInfo: Parsed assistant information
        """
        file_ids = get_value(assistant, "file_ids")
        if not file_ids:
            tool_resources = get_value(assistant, "tool_resources")
            code_interpreter = get_value(tool_resources, "code_interpreter")
            file_ids = get_value(code_interpreter, "file_ids", [])

        return AssistantInfo(
            id=get_value(assistant, "id", ""),
            name=get_value(assistant, "name", ""),
            file_ids=tuple(file_ids or ()),
        )


@dataclass(frozen=True)
class FileInfo:
    """Descriptor of a file attached to an assistant."""

    id: str
    filename: str
    bytes: int = 0
    purpose: str = ""

    @staticmethod
    def from_openai_file(file_obj: Any) -> "FileInfo":
        """Create a FileInfo from an SDK file object."""
        return FileInfo(
            id=get_value(file_obj, "id", ""),
            filename=get_value(file_obj, "filename", "unknown"),
            bytes=int(get_value(file_obj, "bytes", 0)),
            purpose=get_value(file_obj, "purpose", ""),
        )


@dataclass(frozen=True)
class RunInfo:
    """State of one run of an assistant on a thread.

    Attributes:
        id: Run identifier
        thread_id: Thread the run belongs to
        assistant_id: Assistant executing the run
        status: Status string as reported by the API
        last_error: Error message reported for failed runs, if any
    """

    id: str
    thread_id: str
    assistant_id: str
    status: str
    last_error: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == RUN_COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status in RUN_FAILED_STATUSES

    @property
    def is_terminal(self) -> bool:
        """True once the run will not change status any more.

        Unrecognised statuses count as pending so that new API states keep
        being polled instead of being reported as failures.
        """
        return self.is_completed or self.is_failed

    @staticmethod
    def from_openai_run(run: Any) -> "RunInfo":
        """Create a RunInfo from an SDK run object."""
        last_error = get_value(run, "last_error")
        return RunInfo(
            id=get_value(run, "id", ""),
            thread_id=get_value(run, "thread_id", ""),
            assistant_id=get_value(run, "assistant_id", ""),
            status=str(get_value(run, "status", "")),
            last_error=get_value(last_error, "message") if last_error else None,
        )


@dataclass(frozen=True)
class ThreadMessage:
    """A message on a thread, reduced to its text."""

    id: str
    role: str
    run_id: str | None
    text: str

    @staticmethod
    def from_openai_message(message: Any) -> "ThreadMessage":
        """Create a ThreadMessage from an SDK message object.

        Text parts are concatenated in order; parts without text (such as
        image files) contribute nothing.
        """
        parts = []
        for part in get_value(message, "content", []) or []:
            text = get_value(part, "text")
            parts.append(get_value(text, "value", "") if text else "")

        return ThreadMessage(
            id=get_value(message, "id", ""),
            role=get_value(message, "role", ""),
            run_id=get_value(message, "run_id"),
            text="".join(parts),
        )
