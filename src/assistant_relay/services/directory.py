"""Agent directory service.

This module provides the AgentDirectory class which resolves the assistants
the user may talk to: the intersection of the remote catalog and the local
allow-list file, in catalog order.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from assistant_relay.assistants import AssistantInfo, AssistantsClient
from assistant_relay.errors import DirectoryError
from assistant_relay.models import AllowListEntry, parse_allow_list

logger = logging.getLogger(__name__)


class AgentDirectory:
    """Resolves the allowed assistants for this process."""

    def __init__(self, client: AssistantsClient, allowlist_path: Path):
        """Initialize the AgentDirectory.

        Args:
            client: Assistants client used to list the remote catalog
            allowlist_path: Path to the JSON allow-list file
        """
        self.client = client
        self.allowlist_path = allowlist_path

    def load_allow_list(self) -> list[AllowListEntry]:
        """Read and validate the allow-list file.

        Returns:
            Entries in file order (duplicates preserved)

        Raises:
            DirectoryError: If the file is missing, unreadable, or malformed
        """
        try:
            raw = self.allowlist_path.read_bytes()
        except OSError as e:
            raise DirectoryError(
                f"Cannot read allow-list {self.allowlist_path}: {e}"
            ) from e

        try:
            entries = parse_allow_list(raw)
        except ValidationError as e:
            raise DirectoryError(
                f"Malformed allow-list {self.allowlist_path}: {e}"
            ) from e

        logger.debug(f"Loaded {len(entries)} allow-list entries")
        return entries

    async def list_allowed_agents(self) -> list[AssistantInfo]:
        """List the catalog assistants whose id appears in the allow-list.

        Returns:
            Allowed assistants in the catalog's order

        Raises:
            DirectoryError: If the allow-list or the catalog is unavailable
        """
        allowed_ids = {entry.id for entry in self.load_allow_list()}

        try:
            catalog = await self.client.list_assistants()
        except Exception as e:
            raise DirectoryError(f"Error listing assistants: {e}") from e

        allowed = [assistant for assistant in catalog if assistant.id in allowed_ids]
        logger.info(
            f"{len(allowed)} of {len(catalog)} assistants are on the allow-list"
        )
        return allowed
