"""
Read-prompt-dispatch-report loop.

    ┌────────┐  line   ┌────────────┐ status ┌──────────────────────────┐
    │ prompt │───────> │ dispatcher │──────> │ "exit code: N"           │
    └────────┘         └────────────┘        │ + help on 126/127/128    │
        ^                                     └──────────────────────────┘
        └──────────────── OK / error ─────────────────┘
                          130 or end of input -> TERMINATED

The loop blocks on reading a line, and on ``run`` until the engine returns.
"""

from __future__ import annotations
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, TextIO

from .dispatcher import CommandDispatcher, StatusCode
from .help import HelpRenderer
from .messages import MessageEmitter

__all__ = ['Repl', 'ReplState', 'default_prompt_name', 'make_prompt']

log = logging.getLogger("mca.repl")


class ReplState(Enum):
    RUNNING = 'RUNNING'
    TERMINATED = 'TERMINATED'


def default_prompt_name() -> str:
    """Base name of the directory the shell was started from."""
    return Path.cwd().name


def make_prompt(base_name: str) -> str:
    return f"{base_name} MCA % "


class Repl:
    """Interactive session over a pair of text streams.

    Usage:
        code = Repl(dispatcher).run()    # reads stdin until quit / ctrl + d
        sys.exit(code)
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        emitter: Optional[MessageEmitter] = None,
        help_renderer: Optional[HelpRenderer] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        prompt_name: Optional[str] = None,
    ):
        self.dispatcher = dispatcher
        self.emitter = emitter if emitter is not None else MessageEmitter(stdout)
        self.help = help_renderer if help_renderer is not None else HelpRenderer(self.emitter)
        self._stdin = stdin
        self._stdout = stdout
        self.prompt = make_prompt(prompt_name if prompt_name is not None else default_prompt_name())
        self.state = ReplState.RUNNING
        self.exit_code: Optional[StatusCode] = None

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def run(self) -> StatusCode:
        """Loop until quit or end of input; returns the final status code."""
        log.debug("Session started")
        while self.state is ReplState.RUNNING:
            line = self._read_line()
            if line is None:
                self._end_of_input()
            else:
                self.handle_line(line)
        log.debug("Session ended with %d", self.exit_code)
        return self.exit_code

    def handle_line(self, line: str) -> StatusCode:
        """Dispatch one line and report its status."""
        status = self.dispatcher.execute(line)
        self.emitter.emit(f"exit code: {int(status)}")
        if status not in (StatusCode.OK, StatusCode.TERMINATED_BY_USER):
            self.help.render_all()
        if status is StatusCode.TERMINATED_BY_USER:
            self._terminate(status)
        return status

    def _read_line(self) -> Optional[str]:
        """Prompt and read one line; None means the stream was closed."""
        self.stdout.write(self.prompt)
        self.stdout.flush()
        try:
            line = self.stdin.readline()
        except KeyboardInterrupt:
            log.debug("Interrupted at prompt")
            return None
        if not line:
            return None
        return line.rstrip("\r\n")

    def _end_of_input(self) -> None:
        status = StatusCode.TERMINATED_BY_USER
        self.emitter.emit(f"\nexit code: {int(status)}")
        self._terminate(status)

    def _terminate(self, status: StatusCode) -> None:
        self.state = ReplState.TERMINATED
        self.exit_code = status
