"""Pydantic models for files read from disk.

This package contains the Pydantic models used to validate local input
files such as the assistant allow-list.
"""

from assistant_relay.models.allow_list import AllowListEntry, parse_allow_list

__all__ = ["AllowListEntry", "parse_allow_list"]
