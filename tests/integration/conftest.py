"""Pytest configuration for integration tests.

This module provides an in-memory stand-in for the Assistants API and
patches it into the application, so the whole controller loop runs against
a scripted remote service.
"""

from unittest.mock import patch

import httpx
import openai
import pytest

from assistant_relay.assistants import FileInfo, RunInfo, ThreadMessage
from assistant_relay.assistants.types import RUN_COMPLETED, RUN_FAILED_STATUSES


class FakeAssistantsClient:
    """In-memory Assistants service with scripted run statuses.

    Like the real service, it refuses new messages on a thread while one of
    its runs is still active.

    Attributes:
        calls: Every remote call in order, as (name, *args) tuples
        messages: Message history per thread id
        statuses: Status sequence per assistant id; the last one repeats
        answers: Answer text per assistant id; None means no message is posted
    """

    def __init__(self, catalog, files=None, statuses=None, answers=None):
        self.catalog = list(catalog)
        self.files = files or {}
        self.statuses = statuses or {}
        self.answers = answers or {}
        self.calls: list[tuple] = []
        self.messages: dict[str, list[ThreadMessage]] = {}
        self.runs: dict[str, dict] = {}
        self.closed = False
        self.fail_on: dict[str, Exception] = {}

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise self.fail_on[name]

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    async def list_assistants(self):
        self._record("list_assistants")
        return list(self.catalog)

    async def retrieve_file(self, file_id):
        self._record("retrieve_file", file_id)
        if file_id not in self.files:
            raise LookupError(f"No such File object: {file_id}")
        return self.files[file_id]

    async def create_thread(self):
        thread_id = f"thread_{len(self.messages) + 1}"
        self._record("create_thread")
        self.messages[thread_id] = []
        return thread_id

    async def delete_thread(self, thread_id):
        self._record("delete_thread", thread_id)

    async def create_message(
        self, thread_id, content, file_ids=(), attachment_tool="code_interpreter"
    ):
        self._record("create_message", thread_id, content, tuple(file_ids))
        active = [
            run_id
            for run_id, run in self.runs.items()
            if run["thread_id"] == thread_id
            and run["status"] != RUN_COMPLETED
            and run["status"] not in RUN_FAILED_STATUSES
        ]
        if active:
            url = f"https://api.test/v1/threads/{thread_id}/messages"
            request = httpx.Request("POST", url)
            raise openai.BadRequestError(
                f"Can't add messages to {thread_id} while a run {active[0]} is active.",
                response=httpx.Response(400, request=request),
                body=None,
            )
        message_id = f"msg_{sum(len(m) for m in self.messages.values()) + 1}"
        self.messages[thread_id].append(
            ThreadMessage(id=message_id, role="user", run_id=None, text=content)
        )
        return message_id

    async def create_run(self, thread_id, assistant_id):
        self._record("create_run", thread_id, assistant_id)
        run_id = f"run_{len(self.runs) + 1}"
        self.runs[run_id] = {
            "thread_id": thread_id,
            "assistant_id": assistant_id,
            "statuses": list(self.statuses.get(assistant_id, ["completed"])),
            "status": "queued",
            "answered": False,
        }
        return RunInfo(run_id, thread_id, assistant_id, "queued")

    async def retrieve_run(self, thread_id, run_id):
        self._record("retrieve_run", thread_id, run_id)
        run = self.runs[run_id]
        sequence = run["statuses"]
        status = sequence.pop(0) if len(sequence) > 1 else sequence[0]
        run["status"] = status

        if status == "completed" and not run["answered"]:
            run["answered"] = True
            answer = self.answers.get(
                run["assistant_id"], f"Hello from {run['assistant_id']}"
            )
            if answer is not None:
                self.messages[thread_id].append(
                    ThreadMessage(
                        id=f"msg_{run_id}", role="assistant", run_id=run_id, text=answer
                    )
                )
        return RunInfo(run_id, thread_id, run["assistant_id"], status)

    async def cancel_run(self, thread_id, run_id):
        self._record("cancel_run", thread_id, run_id)
        run = self.runs[run_id]
        run["status"] = "cancelling"
        run["statuses"] = ["cancelling", "cancelled"]
        return RunInfo(run_id, thread_id, run["assistant_id"], "cancelling")

    async def list_messages(self, thread_id, run_id=None):
        self._record("list_messages", thread_id, run_id)
        return [
            message
            for message in self.messages[thread_id]
            if run_id is None or message.run_id == run_id
        ]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_client(assistants):
    """A fake service holding the four test assistants and their files."""
    return FakeAssistantsClient(
        assistants,
        files={
            "file_a": FileInfo(id="file_a", filename="report.pdf"),
            "file_b": FileInfo(id="file_b", filename="data.csv"),
            "file_c": FileInfo(id="file_c", filename="notes.md"),
        },
    )


@pytest.fixture(autouse=True)
def mock_assistants_client(fake_client):
    """Patch the client factory so the lifespan uses the fake service."""
    with patch(
        "assistant_relay.app.get_assistants_client", return_value=fake_client
    ) as factory:
        yield factory
