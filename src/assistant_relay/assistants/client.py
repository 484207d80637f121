"""Async OpenAI Assistants client wrapper.

This module provides an async wrapper around openai.AsyncOpenAI covering the
handful of Assistants API calls the conversation loop needs. The client is
designed to be created once at startup and reused for the whole process.
"""

import logging
from typing import Any

import openai

from assistant_relay.assistants.types import (
    AssistantInfo,
    FileInfo,
    RunInfo,
    ThreadMessage,
)

logger = logging.getLogger(__name__)


class AssistantsClient:
    """Async client for the OpenAI Assistants API.

    Every method is a single suspension point that either returns a parsed
    value or raises the SDK error after logging it. The underlying client is
    built with ``max_retries=0`` so failures surface immediately instead of
    being retried behind the caller's back.

    Attributes:
        base_url: Optional API base URL override
        _client: The underlying openai.AsyncOpenAI instance
    """

    def __init__(self, base_url: str | None = None, timeout: float = 60.0) -> None:
        """Initialize the Assistants client.

        Args:
            base_url: Optional API base URL (defaults to the SDK's own)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url
        self._client = openai.AsyncOpenAI(
            base_url=base_url, timeout=timeout, max_retries=0
        )
        logger.info(f"AssistantsClient initialized (base_url={base_url or 'default'})")

    async def list_assistants(self) -> list[AssistantInfo]:
        """List every assistant in the account, following pagination.

        Returns:
            list[AssistantInfo]: Assistants in the order the API returned them

        Raises:
            openai.OpenAIError: If the API request fails
        """
        try:
            assistants = [
                AssistantInfo.from_openai_assistant(assistant)
                async for assistant in self._client.beta.assistants.list(limit=100)
            ]
        except Exception as e:
            logger.error(f"Failed to list assistants: {e}")
            raise

        logger.debug(f"Retrieved {len(assistants)} assistants")
        return assistants

    async def retrieve_file(self, file_id: str) -> FileInfo:
        """Get the descriptor of an uploaded file.

        Args:
            file_id: The file identifier

        Returns:
            FileInfo: File name and metadata
        """
        try:
            file_obj = await self._client.files.retrieve(file_id)
        except Exception as e:
            logger.warning(f"Failed to retrieve file {file_id}: {e}")
            raise
        return FileInfo.from_openai_file(file_obj)

    async def create_thread(self) -> str:
        """Create an empty conversation thread.

        Returns:
            str: The new thread id
        """
        thread = await self._client.beta.threads.create()
        logger.info(f"Created thread {thread.id}")
        return thread.id

    async def delete_thread(self, thread_id: str) -> None:
        """Delete a conversation thread."""
        await self._client.beta.threads.delete(thread_id)
        logger.info(f"Deleted thread {thread_id}")

    async def create_message(
        self,
        thread_id: str,
        content: str,
        file_ids: list[str] | tuple[str, ...] = (),
        attachment_tool: str = "code_interpreter",
    ) -> str:
        """Append a user message to a thread.

        Args:
            thread_id: The thread to post to
            content: Raw user input
            file_ids: Files to attach; omitted from the request when empty
            attachment_tool: Tool type the attached files are made available to

        Returns:
            str: The new message id
        """
        kwargs: dict[str, Any] = {}
        if file_ids:
            kwargs["attachments"] = [
                {"file_id": file_id, "tools": [{"type": attachment_tool}]}
                for file_id in file_ids
            ]

        message = await self._client.beta.threads.messages.create(
            thread_id, role="user", content=content, **kwargs
        )
        logger.debug(
            f"Created message {message.id} on thread {thread_id} "
            f"with {len(file_ids)} attachments"
        )
        return message.id

    async def create_run(self, thread_id: str, assistant_id: str) -> RunInfo:
        """Start a run of an assistant on a thread."""
        run = await self._client.beta.threads.runs.create(
            thread_id, assistant_id=assistant_id
        )
        run_info = RunInfo.from_openai_run(run)
        logger.debug(
            f"Started run {run_info.id} for assistant {assistant_id} "
            f"on thread {thread_id}"
        )
        return run_info

    async def retrieve_run(self, thread_id: str, run_id: str) -> RunInfo:
        """Fetch the current state of a run."""
        run = await self._client.beta.threads.runs.retrieve(run_id, thread_id=thread_id)
        run_info = RunInfo.from_openai_run(run)
        logger.debug(f"Run {run_id} status: {run_info.status}")
        return run_info

    async def cancel_run(self, thread_id: str, run_id: str) -> RunInfo:
        """Ask the service to cancel an in-flight run."""
        run = await self._client.beta.threads.runs.cancel(run_id, thread_id=thread_id)
        logger.info(f"Requested cancellation of run {run_id}")
        return RunInfo.from_openai_run(run)

    async def list_messages(
        self, thread_id: str, run_id: str | None = None
    ) -> list[ThreadMessage]:
        """List the messages of a thread, oldest first.

        Args:
            thread_id: The thread to read
            run_id: Only return messages produced by this run

        Returns:
            list[ThreadMessage]: Messages in chronological order
        """
        kwargs: dict[str, Any] = {"order": "asc", "limit": 100}
        if run_id is not None:
            kwargs["run_id"] = run_id

        messages = [
            ThreadMessage.from_openai_message(message)
            async for message in self._client.beta.threads.messages.list(
                thread_id, **kwargs
            )
        ]
        logger.debug(f"Retrieved {len(messages)} messages from thread {thread_id}")
        return messages

    async def close(self) -> None:
        """Close the client and release its HTTP connection pool."""
        await self._client.close()
        logger.debug("AssistantsClient closed")
