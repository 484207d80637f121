"""Unit tests for AgentDirectory.

Tests allow-list loading and the filtering of the remote catalog.
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from assistant_relay.errors import DirectoryError
from assistant_relay.services import AgentDirectory


@pytest.fixture
def mock_client(assistants):
    """Create a mock AssistantsClient whose catalog holds four assistants."""
    mock_client = AsyncMock()
    mock_client.list_assistants.return_value = assistants
    return mock_client


@pytest.mark.asyncio
async def test_lists_allowed_agents_in_catalog_order(mock_client, allowlist_file):
    """Test that the catalog order wins over the allow-list order."""
    directory = AgentDirectory(mock_client, allowlist_file("asst_4", "asst_1"))

    result = await directory.list_allowed_agents()

    assert [a.id for a in result] == ["asst_1", "asst_4"]


@pytest.mark.asyncio
async def test_duplicate_allow_list_entries_are_harmless(mock_client, allowlist_file):
    directory = AgentDirectory(
        mock_client, allowlist_file("asst_2", "asst_2", "asst_3", "asst_2")
    )

    result = await directory.list_allowed_agents()

    assert [a.id for a in result] == ["asst_2", "asst_3"]


@pytest.mark.asyncio
async def test_unknown_allow_list_ids_are_ignored(mock_client, allowlist_file):
    directory = AgentDirectory(mock_client, allowlist_file("asst_9"))

    assert await directory.list_allowed_agents() == []


@pytest.mark.asyncio
async def test_extra_allow_list_fields_are_accepted(mock_client, tmp_path: Path):
    path = tmp_path / "allowed.json"
    path.write_text('[{"id": "asst_3", "note": "copy editor"}]', encoding="utf-8")
    directory = AgentDirectory(mock_client, path)

    result = await directory.list_allowed_agents()

    assert [a.name for a in result] == ["Editor"]


@pytest.mark.asyncio
async def test_missing_allow_list(mock_client, tmp_path: Path):
    directory = AgentDirectory(mock_client, tmp_path / "missing.json")

    with pytest.raises(DirectoryError, match="Cannot read allow-list"):
        await directory.list_allowed_agents()

    mock_client.list_assistants.assert_not_called()


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        '{"id": "asst_1"}',
        '[{"name": "no id"}]',
        '["asst_1"]',
    ],
)
@pytest.mark.asyncio
async def test_malformed_allow_list(mock_client, tmp_path: Path, content):
    path = tmp_path / "allowed.json"
    path.write_text(content, encoding="utf-8")
    directory = AgentDirectory(mock_client, path)

    with pytest.raises(DirectoryError, match="Malformed allow-list"):
        await directory.list_allowed_agents()


@pytest.mark.asyncio
async def test_catalog_failure(mock_client, allowlist_file):
    mock_client.list_assistants.side_effect = Exception("API error")
    directory = AgentDirectory(mock_client, allowlist_file("asst_1"))

    with pytest.raises(DirectoryError, match="API error"):
        await directory.list_allowed_agents()
