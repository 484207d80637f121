"""Pydantic models for the assistant allow-list file."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AllowListEntry(BaseModel):
    """One assistant the user is permitted to talk to.

    Only the id is used; any other keys (a name or a note for the admin
    who maintains the file) are accepted and ignored.
    """

    id: str = Field(..., min_length=1, description="Assistant identifier")

    model_config = ConfigDict(extra="ignore")


_allow_list_adapter = TypeAdapter(list[AllowListEntry])


def parse_allow_list(raw: str | bytes) -> list[AllowListEntry]:
    """Parse the raw JSON content of an allow-list file.

    Args:
        raw: File content, expected to be a JSON array of objects

    Returns:
        list[AllowListEntry]: Entries in file order

    Raises:
        pydantic.ValidationError: If the content is not valid JSON or an
            entry has no string id
    """
    return _allow_list_adapter.validate_json(raw)
