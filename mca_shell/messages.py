"""
Operator-visible message channel.

Everything the operator is meant to read (status reports, help text) goes
through ``MessageEmitter.emit``. Diagnostics go through ``logging`` instead
(see log_setup.py).
"""

from __future__ import annotations
import sys
from typing import Optional, TextIO

__all__ = ['MESSAGES_ENABLED', 'MessageEmitter']

# Process-wide default; no shell command toggles it.
MESSAGES_ENABLED = True


class MessageEmitter:
    """Write one line per message, with optional ", "-separated arguments.

    Usage:
        out = MessageEmitter()
        out.emit("exit code:", "0")        # -> "exit code: 0"
        out.emit("files", "a.asm", "b")    # -> "files a.asm, b"
    """

    def __init__(self, stream: Optional[TextIO] = None, enabled: Optional[bool] = None):
        self._stream = stream
        self.enabled = MESSAGES_ENABLED if enabled is None else enabled

    @property
    def stream(self) -> TextIO:
        # Resolved per call so a swapped sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, message: str, *args: str) -> None:
        if args:
            message += " " + ", ".join(str(a) for a in args)
        if self.enabled:
            print(message, file=self.stream, flush=True)
