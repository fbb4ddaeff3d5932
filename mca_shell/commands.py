"""
Command table for the MCA shell.

Single source of truth for the command surface: every command the
dispatcher can route to has exactly one entry here, and the help
renderer reads nothing else.

    help      {--all|--<command>}   print usage for one or all commands
    run                             run the engine on the current input file
    directory {-i|-o} {path}        change the input or output file path
    clear     {-i|-o}               accepted, performs no action
    debug     {--on|--off}          toggle engine debug messages
    timeout   {value}               max lines executed before termination
    quit                            leave the shell (also ctrl + d)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

__all__ = ['Command', 'CommandSpec', 'COMMAND_TABLE', 'lookup']


class Command(str, Enum):
    """Closed set of command names understood by the shell."""
    HELP = 'help'
    RUN = 'run'
    DIRECTORY = 'directory'
    CLEAR = 'clear'
    DEBUG = 'debug'
    TIMEOUT = 'timeout'
    QUIT = 'quit'


@dataclass(frozen=True)
class CommandSpec:
    name: str
    arg_count: int
    usage: str
    description: str


def _spec(cmd: Command, arg_count: int, usage: str, description: str) -> CommandSpec:
    return CommandSpec(cmd.value, arg_count, usage, description)


# ──────────────────────────────────────────────
# Table (insertion order is help order)
# ──────────────────────────────────────────────

COMMAND_TABLE: Dict[Command, CommandSpec] = {
    Command.HELP: _spec(
        Command.HELP, 1,
        "help {--all|--run|--directory|--clear|--debug|--timeout|--quit}",
        "Display the help message(s) corresponding to the command given in the argument"),
    Command.RUN: _spec(
        Command.RUN, 0,
        "run",
        "Run the simulator based on the input in the specified input file. "
        "This command takes no arguments"),
    Command.DIRECTORY: _spec(
        Command.DIRECTORY, 2,
        "directory {-i|-o} {path}",
        "Change the path to the input or output file. The first argument specifies "
        "which file is being changed and the second argument specifies the new path "
        "(use ./ to reference a file in the current directory)"),
    Command.CLEAR: _spec(
        Command.CLEAR, 1,
        "clear {-i|-o}",
        "Clears the contents of either the input or output file, determined by the argument"),
    Command.DEBUG: _spec(
        Command.DEBUG, 1,
        "debug {--on|--off}",
        "Enables or disables the debug messages for the assembler, determined by the argument"),
    Command.TIMEOUT: _spec(
        Command.TIMEOUT, 1,
        "timeout {value}",
        "Sets the timeout value which determines the maximum amount of lines of assembly "
        "code that will be executed before the process is terminated"),
    Command.QUIT: _spec(
        Command.QUIT, 0,
        "quit",
        "Quits the assembler command interface. This can also be accomplished by using ctrl + d"),
}


def lookup(name: str) -> Optional[CommandSpec]:
    """Return the table entry for a command name, or None if it is not a command."""
    try:
        return COMMAND_TABLE[Command(name)]
    except ValueError:
        return None
