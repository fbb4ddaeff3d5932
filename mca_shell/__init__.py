"""
MCA Shell
=========
Interactive command interface for the MCA assembler/simulator.

Architecture:
    ┌──────────┐    ┌────────────┐    ┌──────────────┐    ┌────────────────┐
    │   REPL   │───>│ Dispatcher │───>│ Help / no-op │    │ Engine adapter │
    │ (repl)   │<───│ (status)   │───>│              │───>│ (settings/run) │
    └──────────┘    └────────────┘    └──────────────┘    └────────────────┘

    - commands.py:   Command table (names, arity, help text)
    - messages.py:   Operator-visible output channel
    - dispatcher.py: Tokenize, validate, route; every outcome is a StatusCode
    - help.py:       Help rendering from the command table
    - repl.py:       Prompt/read/dispatch/report loop
    - engine.py:     Boundary to the external assembler
    - cli.py:        Process entry point
"""

__version__ = "0.1.0"

from .commands import Command, CommandSpec, COMMAND_TABLE, lookup
from .messages import MessageEmitter
from .engine import EngineAdapter, EngineError, EngineSettings, Setting
from .help import HelpRenderer
from .dispatcher import CommandDispatcher, ParsedCommand, StatusCode, parse_command
from .repl import Repl, ReplState
