"""Exception types raised by assistant-relay.

Errors fall into two groups: fatal ones that end the program with a non-zero
exit code (DirectoryError, SelectionAborted) and recoverable ones that are
reported for a single assistant while the conversation carries on
(ResourceFetchError, RunTimeoutError).
"""

from typing import Any


class RelayError(Exception):
    """Base class for all assistant-relay errors."""


class DirectoryError(RelayError):
    """The assistant catalog or the local allow-list could not be loaded."""


class SelectionAborted(RelayError):
    """The user exhausted the configured number of selection attempts."""


class ResourceFetchError(RelayError):
    """Looking up the file descriptors attached to one assistant failed.

    Attributes:
        assistant_name: Display name of the assistant whose files failed
    """

    def __init__(self, assistant_name: str, cause: BaseException):
        self.assistant_name = assistant_name
        super().__init__(
            f"Error fetching file information for assistant '{assistant_name}': {cause}"
        )


class RunTimeoutError(RelayError):
    """A run was still pending after the poll policy ran out of attempts.

    Attributes:
        run: The last observed run state
        waits: Number of poll intervals waited before giving up
    """

    def __init__(self, run: Any, waits: int):
        self.run = run
        self.waits = waits
        super().__init__(
            f"Run {run.id} still '{run.status}' after {waits} poll attempts"
        )
