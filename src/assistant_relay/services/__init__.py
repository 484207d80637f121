"""Business logic services for assistant-relay.

This package contains the services used before a conversation starts:
resolving the allowed assistants, letting the user pick some, and resolving
the files shared by the selection.
"""

from assistant_relay.services.directory import AgentDirectory
from assistant_relay.services.resources import SharedResourceCatalog
from assistant_relay.services.selector import parse_selection, select_agents

__all__ = [
    "AgentDirectory",
    "SharedResourceCatalog",
    "parse_selection",
    "select_agents",
]
