"""
mca — interactive command interface for the MCA assembler

Usage:
    mca [input] [output] [--engine MODULE:CALLABLE] [--prompt-name NAME]
        [--timeout N] [--debug] [-v] [--log-file PATH]

The optional positionals pre-seed the engine's input and output paths
before the first prompt. ``--engine`` names the callable that runs the
assembler; it receives the current EngineSettings on every ``run``.

Examples:
    mca
    mca ./prog.asm ./prog.out
    mca prog.asm prog.out --engine my_assembler.main:run -v
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .dispatcher import CommandDispatcher, parse_int_arg
from .engine import EngineAdapter, Setting, load_runner
from .help import HelpRenderer
from .log_setup import setup_logging
from .messages import MessageEmitter
from .repl import Repl

__all__ = ['apply_startup_overrides', 'build_parser', 'build_shell', 'main']

log = logging.getLogger("mca")


def _runner_arg(value: str):
    try:
        return load_runner(value)
    except (ValueError, ImportError, AttributeError, TypeError) as e:
        raise argparse.ArgumentTypeError(f"cannot load engine {value!r}: {e}")


def _timeout_arg(value: str) -> int:
    try:
        limit = parse_int_arg(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}")
    if limit < 0:
        raise argparse.ArgumentTypeError(f"timeout must not be negative: {value!r}")
    return limit


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mca",
        description="Interactive command interface for the MCA assembler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""shell commands:
  help {--all|--<command>}   print usage for one or all commands
  run                        run the engine
  directory {-i|-o} {path}   change the input or output file path
  clear {-i|-o}              accepted, no effect
  debug {--on|--off}         toggle engine debug messages
  timeout {value}            max lines executed before termination
  quit                       leave the shell (also ctrl + d)
""",
    )
    parser.add_argument("input", nargs="?", default=None,
                        help="Initial input file path")
    parser.add_argument("output", nargs="?", default=None,
                        help="Initial output file path")
    parser.add_argument("--engine", type=_runner_arg, default=None,
                        help="Engine runner as module:callable (default: none attached)")
    parser.add_argument("--prompt-name", default=None,
                        help="Name shown in the prompt (default: current directory name)")
    parser.add_argument("--timeout", type=_timeout_arg, default=None,
                        help="Initial timeout limit in lines (decimal, 0x.. or $..)")
    parser.add_argument("--debug", action="store_true",
                        help="Start with engine debug messages enabled")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show DEBUG diagnostics on stderr")
    parser.add_argument("--log-file", default=None,
                        help="Also write diagnostics to this file")
    parser.add_argument("--version", action="version",
                        version=f"mca {__version__}")
    return parser


def apply_startup_overrides(engine: EngineAdapter, args: argparse.Namespace) -> None:
    """Write the invocation-time settings through the adapter, once each."""
    if args.input is not None:
        engine.setting(Setting.INPUT, args.input)
    if args.output is not None:
        engine.setting(Setting.OUTPUT, args.output)
    if args.debug:
        engine.setting(Setting.DEBUG, True)
    if args.timeout is not None:
        engine.setting(Setting.TIMEOUT, args.timeout)


def build_shell(engine: EngineAdapter, stdin=None, stdout=None,
                prompt_name: Optional[str] = None) -> Repl:
    """Wire emitter, help renderer, dispatcher and loop around one engine."""
    emitter = MessageEmitter(stdout)
    help_renderer = HelpRenderer(emitter)
    dispatcher = CommandDispatcher(engine, help_renderer)
    return Repl(dispatcher, emitter, help_renderer,
                stdin=stdin, stdout=stdout, prompt_name=prompt_name)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(console_level=logging.DEBUG if args.verbose else logging.WARNING,
                  log_file=args.log_file)

    engine = EngineAdapter(runner=args.engine)
    apply_startup_overrides(engine, args)
    log.debug("Startup settings: %s", engine.settings)

    shell = build_shell(engine, prompt_name=args.prompt_name)
    sys.exit(int(shell.run()))


if __name__ == "__main__":
    main()
