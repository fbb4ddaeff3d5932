"""Help text rendering, driven entirely by the command table."""

from __future__ import annotations
from typing import Optional

from .commands import COMMAND_TABLE, CommandSpec
from .messages import MessageEmitter

__all__ = ['HelpRenderer']

INDENT = "    "


class HelpRenderer:

    def __init__(self, emitter: Optional[MessageEmitter] = None):
        self.emitter = emitter if emitter is not None else MessageEmitter()

    def render_all(self) -> None:
        """Header, then one usage line per command in table order."""
        self.emitter.emit("Valid commands are:")
        for spec in COMMAND_TABLE.values():
            self.emitter.emit(INDENT + spec.usage)

    def render_one(self, spec: CommandSpec) -> None:
        self.emitter.emit(INDENT + spec.usage)
        self.emitter.emit(INDENT + spec.description)
