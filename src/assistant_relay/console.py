"""Line-oriented console handle.

A single Console instance is created per process and passed by reference to
whichever component currently owns the interactive loop (the selector while
choosing assistants, the session while chatting). Blocking reads run on a
daemon thread outside any executor, so the event loop stays free for
in-flight API calls and a Ctrl-C at a prompt does not wait for the read.
"""

import asyncio
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class Console:
    """Process-scoped console input/output.

    Use it as an async context manager so it is released on every exit
    path, including unhandled errors.

    Attributes:
        closed: True once close() has been called
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        """Initialize the console.

        Args:
            input_func: Blocking function that shows a prompt and returns one line
            output_func: Function that writes one line of output
        """
        self._input = input_func
        self._output = output_func
        self.closed = False

    async def ask(self, prompt: str) -> str:
        """Show a prompt and wait for one line of input.

        Raises:
            RuntimeError: If the console has been closed
            EOFError: If the input stream is exhausted
        """
        if self.closed:
            raise RuntimeError("Console is closed")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def read() -> None:
            try:
                line = self._input(prompt)
            except Exception as e:
                deliver(future.set_exception, e)
            else:
                deliver(future.set_result, line)

        def deliver(setter: Callable[[object], None], value: object) -> None:
            def settle() -> None:
                if not future.done():
                    setter(value)

            try:
                loop.call_soon_threadsafe(settle)
            except RuntimeError:
                logger.debug("Event loop closed before console input arrived")

        threading.Thread(target=read, name="console-input", daemon=True).start()
        return await future

    def write(self, text: str = "") -> None:
        """Write one line of output."""
        self._output(text)

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            logger.debug("Console closed")

    async def __aenter__(self) -> "Console":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
