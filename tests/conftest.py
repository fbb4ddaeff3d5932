"""Shared fixtures: a recording engine and stream-backed emitters."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io

import pytest
from mca_shell.engine import EngineAdapter
from mca_shell.help import HelpRenderer
from mca_shell.messages import MessageEmitter
from mca_shell.dispatcher import CommandDispatcher


class RecordingEngine(EngineAdapter):
    """EngineAdapter that logs every setting write and run trigger in order."""

    def __init__(self, runner=None):
        super().__init__(runner=runner)
        self.calls = []
        self.run_count = 0

    def setting(self, name, *value):
        if value:
            self.calls.append((name, value[0]))
        return super().setting(name, *value)

    def run(self):
        self.calls.append(("run",))
        self.run_count += 1
        super().run()


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def emitter(out):
    return MessageEmitter(out)


@pytest.fixture
def help_renderer(emitter):
    return HelpRenderer(emitter)


@pytest.fixture
def dispatcher(engine, help_renderer):
    return CommandDispatcher(engine, help_renderer)
