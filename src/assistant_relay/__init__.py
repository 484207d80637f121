"""assistant-relay: Console orchestrator for conversations with OpenAI Assistants.

This package lets a user pick several assistants from an allow-listed
catalog and talk to all of them, one after another, on a shared thread.
"""

from assistant_relay.app import SessionController, create_controller, run_app

__version__ = "0.1.0"

__all__ = ["SessionController", "create_controller", "run_app", "__version__"]
