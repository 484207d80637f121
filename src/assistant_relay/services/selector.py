"""Interactive assistant selection."""

import logging
from typing import Sequence, TypeVar

from assistant_relay.assistants import AssistantInfo
from assistant_relay.console import Console
from assistant_relay.errors import DirectoryError, SelectionAborted

logger = logging.getLogger(__name__)

T = TypeVar("T")

SELECTION_PROMPT = "Enter your selections: "


def parse_selection(text: str, candidates: Sequence[T]) -> list[T]:
    """Pick candidates from a comma-separated list of 1-based indices.

    Tokens that are not integers or fall outside the candidate list are
    dropped. The result keeps candidate order and holds each candidate once.

    Example:
        >>> parse_selection("3, 1, x, 9", ["a", "b", "c"])
        ['a', 'c']
    """
    picked: set[int] = set()
    for token in text.split(","):
        try:
            index = int(token.strip()) - 1
        except ValueError:
            continue
        if 0 <= index < len(candidates):
            picked.add(index)

    return [candidate for i, candidate in enumerate(candidates) if i in picked]


def _show_menu(candidates: Sequence[AssistantInfo], console: Console) -> None:
    console.write(
        "Please select the assistants you would like to use by number, "
        "separated by commas:"
    )
    for number, assistant in enumerate(candidates, start=1):
        console.write(f"{number}. {assistant.display_name}")


async def select_agents(
    candidates: Sequence[AssistantInfo],
    console: Console,
    max_attempts: int | None = None,
) -> list[AssistantInfo]:
    """Ask the user which assistants to talk to until the answer is usable.

    Args:
        candidates: Allowed assistants, in display order
        console: Console to prompt on
        max_attempts: Give up after this many invalid answers (None: never)

    Returns:
        A non-empty list of candidates in candidate order

    Raises:
        DirectoryError: If there are no candidates to choose from
        SelectionAborted: If max_attempts invalid answers were given
    """
    if not candidates:
        raise DirectoryError("No allowed assistants are available")

    attempts = 0
    while True:
        _show_menu(candidates, console)
        text = await console.ask(SELECTION_PROMPT)
        selection = parse_selection(text, candidates)
        if selection:
            logger.debug(f"Selected {[a.id for a in selection]}")
            return selection

        attempts += 1
        logger.debug(f"Invalid selection {text!r} (attempt {attempts})")
        if max_attempts is not None and attempts >= max_attempts:
            raise SelectionAborted(
                f"No valid selection after {attempts} attempts"
            )
        console.write("Invalid selection. Please try again.")
