# /*
# Copyright 2026 The Cloum Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Shared fixtures: a scripted process runner, a temp store and a CLI runner."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional

import pytest
from typer.testing import CliRunner

from cloum.commands import AppContext
from cloum.errors import CommandNotFoundError
from cloum.models import CommandResult
from cloum.settings import CloumSettings
from cloum.store import ClusterStore


@dataclass
class Call:
    mode: str
    argv: tuple[str, ...]
    env: dict = field(default_factory=dict)
    input_text: Optional[str] = None


class FakeRunner:
    """Records invocations and replays results scripted by argv prefix.

    The longest registered prefix wins. Registering the same prefix several
    times queues results; the last one repeats once the queue drains.
    Unscripted commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self.required: list[str] = []
        self.missing: set[str] = set()
        self._scripts: dict[tuple[str, ...], list[CommandResult]] = {}
        self._lock = threading.Lock()

    def on(self, *argv: str, exit_code: int = 0, stdout: str = "", stderr: str = "") -> FakeRunner:
        self._scripts.setdefault(tuple(argv), []).append(CommandResult(exit_code, stdout, stderr))
        return self

    def require(self, *cmds: str) -> None:
        for cmd in cmds:
            self.required.append(cmd)
            if cmd in self.missing:
                raise CommandNotFoundError(cmd)

    def interactive(self, cmd, args, env=None):
        return self._respond("interactive", cmd, args, env)

    def silent(self, cmd, args, env=None):
        return self._respond("silent", cmd, args, env)

    def pipe(self, cmd, args, input_text, env=None):
        return self._respond("pipe", cmd, args, env, input_text)

    def _respond(self, mode, cmd, args, env, input_text=None) -> CommandResult:
        if cmd in self.missing:
            raise CommandNotFoundError(cmd)
        argv = (cmd, *args)
        with self._lock:
            self.calls.append(Call(mode, argv, dict(env or {}), input_text))
            matches = [p for p in self._scripts if argv[:len(p)] == p]
            if not matches:
                return CommandResult(0)
            queue = self._scripts[max(matches, key=len)]
            result = queue.pop(0) if len(queue) > 1 else queue[0]
        if mode == "interactive" or mode == "pipe":
            return CommandResult(result.exit_code)
        return result

    def argvs(self, mode: Optional[str] = None) -> list[tuple[str, ...]]:
        return [c.argv for c in self.calls if mode is None or c.mode == mode]

    def called(self, *prefix: str) -> bool:
        return any(argv[:len(prefix)] == prefix for argv in self.argvs())

    def find(self, *prefix: str) -> Call:
        for call in self.calls:
            if call.argv[:len(prefix)] == prefix:
                return call
        raise AssertionError(f"{' '.join(prefix)} was never run; calls: {self.argvs()}")


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def store(tmp_path):
    return ClusterStore(tmp_path / "cloum" / "clusters.json")


@pytest.fixture
def app_ctx(tmp_path, store, fake_runner):
    settings = CloumSettings(config_dir=tmp_path / "cloum")
    return AppContext(settings, store, fake_runner)


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def invoke(cli_runner, app_ctx):
    """Invoke the cloum CLI against the temp store and the fake runner."""
    from cloum.cli import app

    def _invoke(*args: str):
        return cli_runner.invoke(app, list(args), obj=app_ctx)

    return _invoke
