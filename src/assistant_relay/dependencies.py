"""Providers for the objects shared across the process.

This module provides the functions that build the settings and the
Assistants client, so the entry point and tests create them the same way.
"""

from functools import lru_cache

from assistant_relay.assistants import AssistantsClient
from assistant_relay.config import RelaySettings


@lru_cache
def get_settings() -> RelaySettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    for the whole process. Settings are loaded from environment variables
    with the RELAY_ prefix.

    Returns:
        RelaySettings: The application configuration settings.
    """
    return RelaySettings()


def get_assistants_client(settings: RelaySettings) -> AssistantsClient:
    """Create the Assistants client described by the settings.

    Args:
        settings: The application settings.

    Returns:
        AssistantsClient: A new client instance.
    """
    return AssistantsClient(
        base_url=settings.openai_base_url,
        timeout=settings.request_timeout,
    )
