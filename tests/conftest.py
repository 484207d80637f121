"""Pytest configuration and shared fixtures for assistant-relay tests.

This module provides common fixtures used across all test modules,
including isolated settings, allow-list files, and a scripted console.
"""

import json

import pytest

from assistant_relay.assistants import AssistantInfo
from assistant_relay.config import RelaySettings
from assistant_relay.console import Console


class RecordingConsole(Console):
    """Console fed from a list of lines that records everything it shows.

    Once the scripted lines run out, reads raise EOFError like a closed stdin.
    """

    def __init__(self, lines: list[str]):
        self.lines = list(lines)
        self.prompts: list[str] = []
        self.output: list[str] = []
        super().__init__(input_func=self._next_line, output_func=self.output.append)

    def _next_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def make_console():
    """Factory for scripted consoles: make_console("1,2", "hello", "exit")."""

    def _make(*lines: str) -> RecordingConsole:
        return RecordingConsole(list(lines))

    return _make


@pytest.fixture
def allowlist_file(tmp_path):
    """Write an allow-list with the given ids and return its path."""

    def _write(*ids: str):
        path = tmp_path / "allowed_assistants.json"
        path.write_text(json.dumps([{"id": i} for i in ids]), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings that never wait between polls.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        RelaySettings: Settings instance configured for testing.
    """
    return RelaySettings(
        allowlist_path=str(tmp_path / "allowed_assistants.json"),
        poll_interval=0.0,
        log_level="DEBUG",
    )


@pytest.fixture
def assistants():
    """Four assistants; the first two share the same files."""
    return [
        AssistantInfo(id="asst_1", name="Researcher", file_ids=("file_a", "file_b")),
        AssistantInfo(id="asst_2", name="Critic", file_ids=("file_a", "file_b")),
        AssistantInfo(id="asst_3", name="Editor"),
        AssistantInfo(id="asst_4", name="Summarizer", file_ids=("file_c",)),
    ]
