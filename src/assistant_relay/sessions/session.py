"""ConversationSession class for talking to several assistants on one thread.

This module provides the ConversationSession class which handles:
- Creating the remote thread shared by all selected assistants
- Recognising the exit and reselect commands
- Sending each user message to every selected assistant in order
- Waiting for each run and printing the assistant's answer
"""

import asyncio
import logging
from typing import Sequence

from assistant_relay.assistants import AssistantInfo, AssistantsClient, RunInfo
from assistant_relay.config import RelaySettings
from assistant_relay.console import Console
from assistant_relay.errors import RunTimeoutError
from assistant_relay.sessions.poller import PollPolicy, PollResult, RunPoller
from assistant_relay.sessions.types import (
    AgentReply,
    SessionOutcome,
    SessionState,
    Turn,
)

logger = logging.getLogger(__name__)

INPUT_PROMPT = "\nInput: "
# Waits allowed for a cancelled run to leave the "cancelling" status.
CANCEL_SETTLE_ATTEMPTS = 10


class ConversationSession:
    """One remote thread shared by the selected assistants.

    The session moves IDLE -> ACTIVE when its thread is created and
    ACTIVE -> ENDED when the user exits or asks for a new selection. Every
    assistant appends to and reads from the same thread, so an assistant
    sees the messages and answers produced for the assistants before it.
    """

    def __init__(
        self,
        client: AssistantsClient,
        console: Console,
        selection: Sequence[AssistantInfo],
        file_ids: Sequence[str] = (),
        poller: RunPoller | None = None,
        settings: RelaySettings | None = None,
    ):
        """Initialize a ConversationSession.

        Args:
            client: Assistants client for all remote calls
            console: Console the session reads from and writes to
            selection: Non-empty list of assistants, in the order they answer
            file_ids: Files attached to every user message
            poller: Run poller (default: built from settings)
            settings: Session settings (default: loaded from the environment)

        Raises:
            ValueError: If the selection is empty
        """
        if not selection:
            raise ValueError("A session needs at least one assistant")

        self.client = client
        self.console = console
        self.selection = list(selection)
        self.file_ids = list(file_ids)
        self.settings = settings or RelaySettings()
        self.poller = poller or RunPoller(
            client, PollPolicy.from_settings(self.settings)
        )
        self.thread_id: str | None = None
        self.state = SessionState.IDLE

    async def start(self) -> str:
        """Create the remote thread and start accepting turns.

        Returns:
            str: The thread id

        Raises:
            RuntimeError: If the session was already started
        """
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"Session already {self.state.value}")

        self.thread_id = await self.client.create_thread()
        self.state = SessionState.ACTIVE
        logger.info(
            f"Session started on thread {self.thread_id} with "
            f"{[a.id for a in self.selection]}"
        )
        return self.thread_id

    def match_command(self, text: str) -> SessionOutcome | None:
        """Return the outcome a command input requests, None for chat input."""
        command = text.strip().lower()
        if command == self.settings.exit_command.lower():
            return SessionOutcome.EXIT
        if command == self.settings.new_command.lower():
            return SessionOutcome.RESELECT
        return None

    async def handle_input(self, text: str) -> SessionOutcome | None:
        """Handle one line of user input.

        Returns:
            The outcome if the input was a command (the session is then
            ended), otherwise None after the turn has been played
        """
        outcome = self.match_command(text)
        if outcome is not None:
            logger.info(f"Session on thread {self.thread_id} ended: {outcome.value}")
            await self.close()
            return outcome

        await self.take_turn(text)
        return None

    async def take_turn(self, text: str) -> Turn:
        """Send the input to every selected assistant, one after another.

        Each assistant's answer is printed before the next assistant is
        asked, so answers always appear in selection order.

        Raises:
            RuntimeError: If the session is not active
        """
        if self.state is not SessionState.ACTIVE:
            raise RuntimeError(f"Cannot take a turn while {self.state.value}")

        turn = Turn(user_input=text)
        for assistant in self.selection:
            reply = await self._ask(assistant, text)
            self._render(reply)
            turn.replies.append(reply)
        return turn

    async def _ask(self, assistant: AssistantInfo, text: str) -> AgentReply:
        await self.client.create_message(
            self.thread_id,
            text,
            file_ids=self.file_ids,
            attachment_tool=self.settings.attachment_tool,
        )
        run = await self.client.create_run(self.thread_id, assistant.id)

        try:
            result = await self._await_run(run)
        except RunTimeoutError as e:
            logger.warning(f"{e} (assistant {assistant.id})")
            await self._cancel_and_settle(run)
            return AgentReply(
                assistant=assistant,
                run_id=run.id,
                status="timeout",
                notice=self._failure_notice(assistant, "timeout"),
            )

        if not result.completed:
            return AgentReply(
                assistant=assistant,
                run_id=run.id,
                status=result.run.status,
                notice=self._failure_notice(
                    assistant, result.run.status, result.run.last_error
                ),
            )

        messages = await self.client.list_messages(self.thread_id, run_id=run.id)
        answers = [
            message
            for message in messages
            if message.role == "assistant" and message.run_id == run.id
        ]
        if answers and answers[-1].text:
            return AgentReply(
                assistant=assistant,
                run_id=run.id,
                status=result.run.status,
                text=answers[-1].text,
            )

        logger.warning(f"Run {run.id} completed without an assistant message")
        return AgentReply(
            assistant=assistant,
            run_id=run.id,
            status=result.run.status,
            notice=(
                f"No response from the assistant '{assistant.display_name}' "
                "or unable to retrieve the message."
            ),
        )

    async def _await_run(self, run: RunInfo) -> PollResult:
        """Poll a run, cancelling it remotely if polling is interrupted."""
        try:
            return await self.poller.wait(self.thread_id, run.id)
        except (KeyboardInterrupt, asyncio.CancelledError):
            if self.settings.cancel_runs_on_interrupt:
                await self._cancel_run(run)
            raise

    async def _cancel_run(self, run: RunInfo) -> None:
        try:
            await self.client.cancel_run(self.thread_id, run.id)
        except Exception as e:
            logger.warning(f"Failed to cancel run {run.id}: {e}")

    async def _cancel_and_settle(self, run: RunInfo) -> None:
        """Cancel a run and wait until it stops, since an active run locks
        the thread against new messages."""
        await self._cancel_run(run)
        try:
            result = await self.poller.bounded(CANCEL_SETTLE_ATTEMPTS).wait(
                self.thread_id, run.id
            )
        except RunTimeoutError as e:
            logger.warning(
                f"Run {run.id} still {e.run.status} after cancellation, "
                "the thread may reject new messages"
            )
        except Exception as e:
            logger.warning(f"Failed to check cancelled run {run.id}: {e}")
        else:
            logger.info(f"Cancelled run {run.id} settled as {result.run.status}")

    @staticmethod
    def _failure_notice(
        assistant: AssistantInfo, status: str, last_error: str | None = None
    ) -> str:
        notice = (
            f"Run did not complete successfully for '{assistant.display_name}'. "
            f"Status: {status}"
        )
        if last_error:
            notice += f" ({last_error})"
        return notice

    def _render(self, reply: AgentReply) -> None:
        if reply.answered:
            self.console.write(
                f"\nResponse from '{reply.assistant.display_name}':\n{reply.text}"
            )
        else:
            self.console.write(reply.notice or "")

    async def run(self) -> SessionOutcome:
        """Drive turns until the user exits or asks for a new selection.

        End of input on the console is treated like the exit command.
        """
        if self.state is SessionState.IDLE:
            await self.start()

        while True:
            try:
                text = await self.console.ask(INPUT_PROMPT)
            except EOFError:
                logger.info("Console input closed, ending session")
                await self.close()
                return SessionOutcome.EXIT

            outcome = await self.handle_input(text)
            if outcome is not None:
                return outcome

    async def close(self) -> None:
        """End the session, deleting the thread if configured to."""
        if self.state is SessionState.ENDED:
            return

        self.state = SessionState.ENDED
        if self.thread_id is not None and self.settings.delete_threads_on_end:
            try:
                await self.client.delete_thread(self.thread_id)
            except Exception as e:
                logger.warning(f"Failed to delete thread {self.thread_id}: {e}")
