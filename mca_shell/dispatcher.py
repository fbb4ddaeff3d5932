"""
Command dispatcher for the MCA shell.

Turns one raw input line into a status code:

  1. Split the line on whitespace. Token 0 is the command name, the rest
     are positional arguments.
  2. Reject names missing from the command table  -> UNKNOWN_COMMAND (127)
  3. Reject a wrong argument count                -> INVALID_ARGS    (128)
  4. Run the command's handler and return its status.

Handlers signal problems by raising a ``ShellError`` subclass, each of which
carries its status code. ``execute`` converts them into that code, so the
caller only ever sees a ``StatusCode``.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from .commands import COMMAND_TABLE, Command, lookup
from .engine import EngineAdapter, EngineError, Setting
from .help import HelpRenderer

__all__ = [
    'ArgumentArityError', 'ArgumentValueError', 'CommandDispatcher', 'CommandFailed',
    'ParsedCommand', 'ShellError', 'StatusCode', 'UnknownCommand', 'UserTermination',
    'parse_command', 'parse_int_arg',
]

log = logging.getLogger("mca.dispatch")


class StatusCode(IntEnum):
    """Dispatch outcomes; these double as process exit codes."""
    OK = 0
    CANNOT_EXECUTE = 126        # command exists but could not run
    UNKNOWN_COMMAND = 127
    INVALID_ARGS = 128          # wrong count or unrecognised value
    TERMINATED_BY_USER = 130    # quit or end of input


# ──────────────────────────────────────────────
# Error taxonomy
# ──────────────────────────────────────────────

class ShellError(Exception):
    """Base class for dispatch failures. ``status`` is the code it maps to."""
    status = StatusCode.CANNOT_EXECUTE


class UnknownCommand(ShellError):
    status = StatusCode.UNKNOWN_COMMAND


class ArgumentArityError(ShellError):
    status = StatusCode.INVALID_ARGS


class ArgumentValueError(ShellError):
    status = StatusCode.INVALID_ARGS


class UserTermination(ShellError):
    status = StatusCode.TERMINATED_BY_USER


class CommandFailed(ShellError):
    status = StatusCode.CANNOT_EXECUTE


# ──────────────────────────────────────────────
# Parsing
# ──────────────────────────────────────────────

@dataclass
class ParsedCommand:
    name: str
    args: List[str] = field(default_factory=list)


def parse_command(raw_line: str) -> ParsedCommand:
    """Whitespace-split a line. An empty line yields an empty command name."""
    tokens = raw_line.split()
    if not tokens:
        return ParsedCommand("")
    return ParsedCommand(tokens[0], tokens[1:])


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...), $ prefix, or decimal."""
    value = value.strip()
    if value.startswith("0x") or value.startswith("0X"):
        return int(value, 16)
    if value.startswith("$"):
        return int(value[1:], 16)  # Motorola hex convention
    return int(value)


# ──────────────────────────────────────────────
# Dispatcher
# ──────────────────────────────────────────────

Handler = Callable[[List[str]], StatusCode]

_FILE_FLAGS = {"-i": Setting.INPUT, "-o": Setting.OUTPUT}
_DEBUG_FLAGS = {"--on": True, "--off": False}


class CommandDispatcher:
    """Validate and route input lines.

    Usage:
        dispatcher = CommandDispatcher(EngineAdapter())
        dispatcher.execute("directory -i prog.asm")   # StatusCode.OK
        dispatcher.execute("quit")                    # StatusCode.TERMINATED_BY_USER
    """

    def __init__(self, engine: EngineAdapter, help_renderer: Optional[HelpRenderer] = None):
        self.engine = engine
        self.help = help_renderer if help_renderer is not None else HelpRenderer()
        self.handlers: Dict[Command, Handler] = {
            Command.HELP: self._help,
            Command.RUN: self._run,
            Command.DIRECTORY: self._directory,
            Command.CLEAR: self._clear,
            Command.DEBUG: self._debug,
            Command.TIMEOUT: self._timeout,
            Command.QUIT: self._quit,
        }
        if set(self.handlers) != set(COMMAND_TABLE):
            missing = set(COMMAND_TABLE) ^ set(self.handlers)
            raise RuntimeError(f"Handler table out of sync with command table: {missing}")

    def execute(self, raw_line: str) -> StatusCode:
        parsed = parse_command(raw_line)
        try:
            status = self._dispatch(parsed)
        except ShellError as e:
            log.debug("%r -> %s (%s)", raw_line, e.status.name, e)
            return e.status
        log.debug("%r -> %s", raw_line, status.name)
        return status

    def _dispatch(self, parsed: ParsedCommand) -> StatusCode:
        spec = lookup(parsed.name)
        if spec is None:
            raise UnknownCommand(f"no such command: {parsed.name!r}")
        if len(parsed.args) != spec.arg_count:
            raise ArgumentArityError(
                f"{spec.name} takes {spec.arg_count} argument(s), got {len(parsed.args)}")

        handler = self.handlers.get(Command(spec.name))
        if handler is None:
            raise UnknownCommand(f"no handler for {spec.name!r}")
        return handler(parsed.args)

    # ── Handlers ─────────────────────────────────────────────────────────

    def _help(self, args: List[str]) -> StatusCode:
        topic = args[0]
        if topic == "--all":
            self.help.render_all()
            return StatusCode.OK

        if topic.startswith("--"):
            topic = topic[2:]
        spec = lookup(topic)
        if spec is None:
            raise ArgumentValueError(f"no help for {args[0]!r}")
        self.help.render_one(spec)
        return StatusCode.OK

    def _run(self, args: List[str]) -> StatusCode:
        try:
            self.engine.run()
        except EngineError as e:
            log.error("Engine run failed: %s", e)
            raise CommandFailed(str(e)) from e
        return StatusCode.OK

    def _directory(self, args: List[str]) -> StatusCode:
        flag, path = args
        setting = _FILE_FLAGS.get(flag)
        if setting is None:
            raise ArgumentValueError(f"directory expects -i or -o, got {flag!r}")
        self.engine.setting(setting, path)
        return StatusCode.OK

    def _clear(self, args: List[str]) -> StatusCode:
        # Accepted but intentionally inert: nothing is cleared for either flag.
        return StatusCode.OK

    def _debug(self, args: List[str]) -> StatusCode:
        if args[0] not in _DEBUG_FLAGS:
            raise ArgumentValueError(f"debug expects --on or --off, got {args[0]!r}")
        self.engine.setting(Setting.DEBUG, _DEBUG_FLAGS[args[0]])
        return StatusCode.OK

    def _timeout(self, args: List[str]) -> StatusCode:
        try:
            limit = parse_int_arg(args[0])
        except ValueError:
            raise ArgumentValueError(f"timeout expects an integer, got {args[0]!r}") from None
        if limit < 0:
            raise ArgumentValueError(f"timeout must not be negative, got {limit}")
        self.engine.setting(Setting.TIMEOUT, limit)
        return StatusCode.OK

    def _quit(self, args: List[str]) -> StatusCode:
        raise UserTermination("quit")
