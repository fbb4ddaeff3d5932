"""
External engine adapter.

The assembler/simulator itself lives outside this package. The shell only
ever talks to it through ``EngineAdapter``:

    setting(name, value)   write a setting, returns the previous value
    setting(name)          read a setting
    run()                  run the engine on the current settings (blocking)

The engine proper is a *runner*: any callable taking an ``EngineSettings``.
Runners report failure by raising ``EngineError``.
"""

from __future__ import annotations
import importlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

__all__ = [
    'DEFAULT_TIMEOUT', 'EngineAdapter', 'EngineError', 'EngineSettings',
    'Runner', 'Setting', 'load_runner',
]

log = logging.getLogger("mca.engine")

DEFAULT_TIMEOUT = 10_000        # lines of execution before forced termination


class EngineError(Exception):
    """Raised when the engine cannot carry out a request."""


class Setting(str, Enum):
    INPUT = 'input'
    OUTPUT = 'output'
    DEBUG = 'debug'
    TIMEOUT = 'timeout'


@dataclass
class EngineSettings:
    input_path: str = ""
    output_path: str = ""
    debug: bool = False
    timeout: int = DEFAULT_TIMEOUT


# Setting name -> EngineSettings attribute
_FIELDS: Dict[Setting, str] = {
    Setting.INPUT: 'input_path',
    Setting.OUTPUT: 'output_path',
    Setting.DEBUG: 'debug',
    Setting.TIMEOUT: 'timeout',
}

Runner = Callable[[EngineSettings], Any]

_UNSET = object()


class EngineAdapter:
    """Holds the engine settings and triggers the runner.

    Usage:
        engine = EngineAdapter(runner=my_assembler_main)
        engine.setting("input", "prog.asm")
        engine.run()
    """

    def __init__(self, runner: Optional[Runner] = None,
                 settings: Optional[EngineSettings] = None):
        self.runner = runner
        self.settings = settings if settings is not None else EngineSettings()

    def setting(self, name: str, value: Any = _UNSET) -> Any:
        """Read a setting, or write it and return the value it replaced."""
        try:
            field = _FIELDS[Setting(name)]
        except ValueError:
            raise EngineError(f"Unknown engine setting: {name!r}") from None

        current = getattr(self.settings, field)
        if value is _UNSET:
            return current
        setattr(self.settings, field, value)
        log.debug("setting %s: %r -> %r", field, current, value)
        return current

    def run(self) -> None:
        if self.runner is None:
            log.warning("No engine attached; 'run' has nothing to execute")
            return
        log.info("Running engine: input=%r output=%r debug=%s timeout=%d",
                 self.settings.input_path, self.settings.output_path,
                 self.settings.debug, self.settings.timeout)
        try:
            self.runner(self.settings)
        except OSError as e:
            raise EngineError(f"Engine I/O failure: {e}") from e
        log.info("Engine finished")


def load_runner(spec: str) -> Runner:
    """Import a runner from a ``module:callable`` spec.

    Raises ValueError for a malformed spec, ImportError / AttributeError when
    the target does not exist, TypeError when it is not callable.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Engine spec must look like 'module:callable', got {spec!r}")
    module = importlib.import_module(module_name)
    runner = module
    for part in attr.split("."):
        runner = getattr(runner, part)
    if not callable(runner):
        raise TypeError(f"Engine target {spec!r} is not callable")
    return runner
