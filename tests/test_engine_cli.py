"""
Engine adapter, logging setup, and process entry point.
"""
import io
import logging
import sys

import pytest
from mca_shell import cli
from mca_shell.engine import (
    DEFAULT_TIMEOUT, EngineAdapter, EngineError, EngineSettings, Setting, load_runner,
)
from mca_shell.log_setup import setup_logging

from conftest import RecordingEngine


def _record_run(settings):
    _record_run.seen.append(settings.input_path)


_record_run.seen = []


class TestEngineAdapter:

    def test_defaults(self):
        s = EngineAdapter().settings
        assert s == EngineSettings("", "", False, DEFAULT_TIMEOUT)

    def test_write_returns_previous(self):
        engine = EngineAdapter()
        assert engine.setting("input", "a.asm") == ""
        assert engine.setting("input", "b.asm") == "a.asm"
        assert engine.setting(Setting.INPUT) == "b.asm"

    def test_all_settings_round_trip_names(self):
        engine = EngineAdapter()
        engine.setting("output", "x.out")
        engine.setting("debug", True)
        engine.setting("timeout", 5)
        assert engine.settings == EngineSettings("", "x.out", True, 5)

    def test_unknown_setting(self):
        with pytest.raises(EngineError):
            EngineAdapter().setting("verbosity", 3)

    def test_run_passes_settings(self):
        seen = []
        engine = EngineAdapter(runner=seen.append)
        engine.run()
        assert seen == [engine.settings]

    def test_run_without_runner(self):
        EngineAdapter().run()

    def test_os_error_becomes_engine_error(self):
        def runner(settings):
            raise PermissionError("read-only")
        with pytest.raises(EngineError):
            EngineAdapter(runner=runner).run()

    def test_other_errors_propagate(self):
        def runner(settings):
            raise ZeroDivisionError()
        with pytest.raises(ZeroDivisionError):
            EngineAdapter(runner=runner).run()


class TestLoadRunner:

    def test_dotted_attribute(self):
        assert load_runner("os.path:join") is __import__("os").path.join

    def test_malformed(self):
        for spec in ["nocolon", ":func", "mod:"]:
            with pytest.raises(ValueError):
                load_runner(spec)

    def test_missing_module(self):
        with pytest.raises(ImportError):
            load_runner("no_such_module_for_mca:run")

    def test_not_callable(self):
        with pytest.raises(TypeError):
            load_runner("os:sep")


class TestLogging:

    def test_file_handler_captures_debug(self, tmp_path):
        log_file = tmp_path / "logs" / "mca.log"
        logger = setup_logging(log_file=log_file)
        try:
            logging.getLogger("mca.engine").debug("setting %s", "input")
            for h in logger.handlers:
                h.flush()
            text = log_file.read_text(encoding="utf-8")
            assert "mca.engine" in text
            assert "setting input" in text
        finally:
            setup_logging()

    def test_setup_replaces_handlers(self):
        first = setup_logging()
        second = setup_logging()
        assert first is second
        assert len(second.handlers) == 1


class TestStartupOverrides:

    def test_positionals_written_once(self):
        engine = RecordingEngine()
        args = cli.build_parser().parse_args(["in.asm", "out.bin"])
        cli.apply_startup_overrides(engine, args)
        assert engine.calls == [("input", "in.asm"), ("output", "out.bin")]

    def test_input_only(self):
        engine = RecordingEngine()
        cli.apply_startup_overrides(engine, cli.build_parser().parse_args(["in.asm"]))
        assert engine.calls == [("input", "in.asm")]

    def test_no_arguments(self):
        engine = RecordingEngine()
        cli.apply_startup_overrides(engine, cli.build_parser().parse_args([]))
        assert engine.calls == []

    def test_debug_and_timeout_options(self):
        engine = RecordingEngine()
        args = cli.build_parser().parse_args(["--debug", "--timeout", "0x40"])
        cli.apply_startup_overrides(engine, args)
        assert engine.calls == [("debug", True), ("timeout", 64)]

    def test_bad_timeout_option(self):
        with pytest.raises(SystemExit) as exc:
            cli.build_parser().parse_args(["--timeout", "lots"])
        assert exc.value.code == 2

    def test_bad_engine_option(self):
        with pytest.raises(SystemExit) as exc:
            cli.build_parser().parse_args(["--engine", "no_such_module_for_mca:run"])
        assert exc.value.code == 2


class TestMain:

    def _main(self, monkeypatch, script, argv):
        monkeypatch.setattr(sys, "stdin", io.StringIO(script))
        with pytest.raises(SystemExit) as exc:
            cli.main(argv)
        setup_logging()
        return exc.value.code

    def test_quit_exits_130(self, monkeypatch, capsys):
        code = self._main(monkeypatch, "quit\n", ["--prompt-name", "proj"])
        assert code == 130
        out = capsys.readouterr().out
        assert out == "proj MCA % exit code: 130\n"

    def test_end_of_input_exits_130(self, monkeypatch, capsys):
        assert self._main(monkeypatch, "", ["--prompt-name", "proj"]) == 130
        assert capsys.readouterr().out.endswith("\nexit code: 130\n")

    def test_engine_runs_with_startup_paths(self, monkeypatch, capsys):
        _record_run.seen.clear()
        argv = ["first.asm", "first.out", "--engine", f"{__name__}:_record_run",
                "--prompt-name", "p"]
        assert self._main(monkeypatch, "run\nquit\n", argv) == 130
        assert _record_run.seen == ["first.asm"]
        assert "exit code: 0" in capsys.readouterr().out
