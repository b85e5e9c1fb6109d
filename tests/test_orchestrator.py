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

"""Tests for the concurrent fan-out helper."""

from __future__ import annotations

import time

import pytest

from cloum import console
from cloum.errors import CloumError
from cloum.orchestrator import run_parallel


def test_run_parallel_returns_results_by_name():
    assert run_parallel({"a": lambda: 1, "b": lambda: 2}) == {"a": 1, "b": 2}


def test_run_parallel_empty():
    assert run_parallel({}) == {}


def test_run_parallel_replays_output_in_task_order(capsys):
    def slow():
        time.sleep(0.1)
        console.print("slow branch")

    def fast():
        console.print("fast branch")

    run_parallel({"slow": slow, "fast": fast})

    err = capsys.readouterr().err
    assert err.index("slow branch") < err.index("fast branch")


def test_run_parallel_keeps_output_when_a_task_fails(capsys):
    def ok():
        time.sleep(0.1)
        console.print("ok branch done")

    def broken():
        console.print("broken branch started")
        raise CloumError("boom")

    with pytest.raises(CloumError, match="boom"):
        run_parallel({"ok": ok, "broken": broken})

    err = capsys.readouterr().err
    assert "ok branch done" in err
    assert "broken branch started" in err
