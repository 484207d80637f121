"""Session controller and application lifespan management.

This module contains the SessionController that drives the main loop
(select assistants, converse, exit or reselect, repeat), the lifespan
context manager that owns the process-wide client and console, and
run_app() which ties them together for the CLI.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

from assistant_relay.assistants import AssistantInfo, AssistantsClient
from assistant_relay.config import RelaySettings
from assistant_relay.console import Console
from assistant_relay.dependencies import get_assistants_client
from assistant_relay.errors import DirectoryError, SelectionAborted
from assistant_relay.services import (
    AgentDirectory,
    SharedResourceCatalog,
    select_agents,
)
from assistant_relay.sessions import (
    ConversationSession,
    PollPolicy,
    RunPoller,
    SessionOutcome,
)

logger = logging.getLogger(__name__)


class SessionController:
    """Main loop composing selection, resources, and sessions.

    The allowed assistants are listed once. Each pass through the loop
    reuses the current selection or asks for a new one, then runs a fresh
    session on a new thread until the user exits or asks to reselect.
    """

    def __init__(
        self,
        client: AssistantsClient,
        console: Console,
        settings: RelaySettings,
        directory: AgentDirectory | None = None,
        catalog: SharedResourceCatalog | None = None,
        poller: RunPoller | None = None,
    ):
        self.client = client
        self.console = console
        self.settings = settings
        self.directory = directory or AgentDirectory(
            client, settings.resolved_allowlist_path
        )
        self.catalog = catalog or SharedResourceCatalog(
            client, console, verify_shared=settings.verify_shared_resources
        )
        self.poller = poller or RunPoller(client, PollPolicy.from_settings(settings))

        self.selection: list[AssistantInfo] | None = None
        self.file_ids: list[str] = []

    async def choose(self, candidates: list[AssistantInfo]) -> None:
        """Ask for a selection and resolve its shared files."""
        self.selection = await select_agents(
            candidates,
            self.console,
            max_attempts=self.settings.selection_max_attempts,
        )
        self.file_ids = await self.catalog.resources_for(self.selection)
        names = ", ".join(a.display_name for a in self.selection)
        self.console.write(
            f"\nWelcome! You are now using the following assistants: {names}\n"
        )

    def create_session(self) -> ConversationSession:
        if not self.selection:
            raise RuntimeError("Cannot create a session without a selection")
        return ConversationSession(
            self.client,
            self.console,
            self.selection,
            file_ids=self.file_ids,
            poller=self.poller,
            settings=self.settings,
        )

    async def run(self) -> int:
        """Run the main loop until the user exits.

        Returns:
            int: Process exit code, 1 if the allowed assistants could not be
                listed or the selection was aborted, 0 otherwise
        """
        try:
            candidates = await self.directory.list_allowed_agents()
        except DirectoryError as e:
            logger.error(f"Error listing or filtering assistants: {e}")
            self.console.write(f"Error listing or filtering assistants: {e}")
            return 1

        while True:
            if self.selection is None:
                try:
                    await self.choose(candidates)
                except EOFError:
                    logger.info("Console input closed during selection")
                    break
                except (DirectoryError, SelectionAborted) as e:
                    logger.error(str(e))
                    self.console.write(str(e))
                    return 1

            session = self.create_session()
            outcome = await session.run()

            if outcome is SessionOutcome.EXIT:
                break
            self.selection = None
            self.file_ids = []

        self.console.write("\nGoodbye!\n")
        return 0


def create_controller(
    settings: RelaySettings, client: AssistantsClient, console: Console
) -> SessionController:
    """Create a SessionController wired from the settings.

    Args:
        settings: The application settings.
        client: The Assistants client shared by every component.
        console: The console shared by every component.

    Returns:
        SessionController: A controller ready to run.
    """
    return SessionController(client=client, console=console, settings=settings)


@asynccontextmanager
async def lifespan(
    settings: RelaySettings, console: Console | None = None
) -> AsyncIterator[SessionController]:
    """Own the process-wide client and console for the duration of a run.

    Both are released when the block exits, whether it finishes normally,
    is interrupted, or raises.

    Args:
        settings: The application settings.
        console: Console to use (default: stdin/stdout).

    Yields:
        SessionController: The controller built on the shared resources.
    """
    client = get_assistants_client(settings)
    logger.info("Initialized Assistants client")
    try:
        async with console or Console() as active_console:
            yield create_controller(settings, client, active_console)
    finally:
        await client.close()
        logger.info("Assistants client closed")


async def run_app(settings: RelaySettings, console: Console | None = None) -> int:
    """Run the interactive orchestrator.

    Unexpected errors are logged and reported instead of propagating.

    Args:
        settings: The application settings.
        console: Console to use (default: stdin/stdout).

    Returns:
        int: Process exit code.
    """
    try:
        async with lifespan(settings, console) as controller:
            return await controller.run()
    except Exception as e:
        logger.exception("Unhandled error in the conversation loop")
        print(f"An error occurred: {e}", file=sys.stderr)
        return 1
