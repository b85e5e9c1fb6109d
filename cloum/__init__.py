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

"""cloum - manage Kubernetes cluster connections across GCP, AWS and Azure."""

from __future__ import annotations

import io
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from rich.console import Console


class ThreadAwareConsole:
    """Stderr console whose output a worker thread can capture.

    Provider branches run concurrently by ``run_parallel`` print through this
    object; each branch captures its own lines so they can be shown as one
    block once every branch has finished.
    """

    def __init__(self, default: Console) -> None:
        self.__dict__.update(_default=default, _captures=threading.local())

    @property
    def _active(self) -> Console:
        active = getattr(self._captures, "console", None)
        return self._default if active is None else active

    def __getattr__(self, name: str):
        return getattr(self._active, name)

    @contextmanager
    def capture(self) -> Iterator[Callable[[], str]]:
        """Redirect this thread's output; yields a getter for the ANSI text so far."""
        sink = io.StringIO()
        self._captures.console = Console(
            file=sink, force_terminal=self._default.is_terminal, width=self._default.width, highlight=False,
        )
        try:
            yield sink.getvalue
        finally:
            self._captures.console = None


console = ThreadAwareConsole(Console(stderr=True, highlight=False))
logger = logging.getLogger("cloum")
