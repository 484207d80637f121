"""Shared resource catalog service.

This module provides the SharedResourceCatalog class which shows the files
attached to each selected assistant and decides which file ids get attached
to the user's messages. The selected assistants are assumed to share the
same files, so the first assistant's files are used for everyone.
"""

import asyncio
import logging
from typing import Sequence

from assistant_relay.assistants import AssistantInfo, AssistantsClient, FileInfo
from assistant_relay.console import Console
from assistant_relay.errors import ResourceFetchError

logger = logging.getLogger(__name__)


class SharedResourceCatalog:
    """Resolves and displays the files attached to a selection."""

    def __init__(
        self,
        client: AssistantsClient,
        console: Console,
        verify_shared: bool = False,
    ):
        """Initialize the SharedResourceCatalog.

        Args:
            client: Assistants client used to look up file descriptors
            console: Console the file listings are printed on
            verify_shared: Warn when an assistant's files differ from the first's
        """
        self.client = client
        self.console = console
        self.verify_shared = verify_shared

    async def describe(self, assistant: AssistantInfo) -> list[FileInfo]:
        """Fetch the descriptors of every file attached to one assistant.

        Raises:
            ResourceFetchError: If any descriptor lookup fails
        """
        try:
            return list(
                await asyncio.gather(
                    *(self.client.retrieve_file(file_id) for file_id in assistant.file_ids)
                )
            )
        except Exception as e:
            raise ResourceFetchError(assistant.display_name, e) from e

    async def resources_for(self, selection: Sequence[AssistantInfo]) -> list[str]:
        """Print each assistant's files and return the ids to attach.

        A failed lookup for one assistant is reported and does not stop the
        listing for the others.

        Args:
            selection: The selected assistants, first one is authoritative

        Returns:
            File ids of the first selected assistant

        Raises:
            ValueError: If the selection is empty
        """
        if not selection:
            raise ValueError("Cannot resolve resources for an empty selection")

        for assistant in selection:
            self.console.write(
                f"\nFiles available for assistant '{assistant.display_name}':"
            )
            try:
                files = await self.describe(assistant)
            except ResourceFetchError as e:
                logger.warning(str(e))
                self.console.write(str(e))
                continue

            for number, file_info in enumerate(files, start=1):
                self.console.write(
                    f"{number}. {file_info.filename} (ID: {file_info.id})"
                )

        shared = list(selection[0].file_ids)
        if self.verify_shared:
            self._warn_on_mismatch(selection)
        return shared

    def _warn_on_mismatch(self, selection: Sequence[AssistantInfo]) -> None:
        first = selection[0]
        for assistant in selection[1:]:
            if assistant.file_ids != first.file_ids:
                message = (
                    f"Assistant '{assistant.display_name}' has different files than "
                    f"'{first.display_name}'; only the files of "
                    f"'{first.display_name}' are attached to messages"
                )
                logger.warning(message)
                self.console.write(f"Warning: {message}")
