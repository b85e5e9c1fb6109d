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

"""Concurrent fan-out used by status probes."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from rich.text import Text

from cloum import console

T = TypeVar("T")


def run_parallel(tasks: dict[str, Callable[[], T]]) -> dict[str, T]:
    """Run tasks in parallel, printing each task's output as a clean block.

    Output is replayed in the order *tasks* was given, not completion order,
    and is still shown for every task that ran when one of them fails.

    Args:
        tasks: Mapping of task name to callable.

    Returns:
        Mapping of task name to the value its callable returned.

    Raises:
        Exception: Re-raises the first exception from any failed task.
    """
    if not tasks:
        return {}

    outputs: dict[str, str] = {}
    results: dict[str, T] = {}
    lock = threading.Lock()

    def _run_task(name: str, fn: Callable[[], T]) -> None:
        with console.capture() as captured:
            try:
                value = fn()
            finally:
                with lock:
                    outputs[name] = captured()
        with lock:
            results[name] = value

    try:
        with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
            futures = {executor.submit(_run_task, name, fn): name for name, fn in tasks.items()}
            for future in as_completed(futures):
                future.result()
    finally:
        for name in tasks:
            if outputs.get(name):
                console.print(Text.from_ansi(outputs[name]))
    return {name: results[name] for name in tasks}
