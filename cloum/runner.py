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

"""Process runner for provider CLIs, kubectl and the container engine."""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from typing import Optional

import sh

from cloum import logger
from cloum.errors import CommandNotFoundError
from cloum.models import CommandResult


def require_command(cmd: str) -> None:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Raises:
        CommandNotFoundError: If the command is not found.
    """
    try:
        sh.which(cmd)
    except sh.ErrorReturnCode as err:
        raise CommandNotFoundError(cmd) from err


def _merged_env(env: Optional[Mapping[str, str]]) -> Optional[dict[str, str]]:
    if not env:
        return None
    return {**os.environ, **env}


class ProcessRunner:
    """Spawns external commands in one of two modes.

    Interactive runs inherit the terminal so prompts and browser-based
    login flows reach the user; nothing is captured. Silent runs capture
    both streams for programmatic use. No timeout is applied in either mode.
    """

    def require(self, *cmds: str) -> None:
        """Fail fast when any of *cmds* is missing from PATH."""
        for cmd in cmds:
            require_command(cmd)

    def interactive(
        self, cmd: str, args: Sequence[str], env: Optional[Mapping[str, str]] = None,
    ) -> CommandResult:
        """Run with inherited stdio and return only the exit code.

        Args:
            cmd: Executable name.
            args: Arguments passed to the executable.
            env: Extra variables merged over the current environment.

        Raises:
            CommandNotFoundError: If the executable is not installed.
        """
        return self._run(cmd, args, env=env, capture=False)

    def silent(
        self, cmd: str, args: Sequence[str], env: Optional[Mapping[str, str]] = None,
    ) -> CommandResult:
        """Run with captured stdout/stderr.

        Raises:
            CommandNotFoundError: If the executable is not installed.
        """
        return self._run(cmd, args, env=env, capture=True)

    def pipe(
        self,
        cmd: str,
        args: Sequence[str],
        input_text: str,
        env: Optional[Mapping[str, str]] = None,
    ) -> CommandResult:
        """Feed *input_text* to stdin, leaving stdout/stderr on the terminal.

        Raises:
            CommandNotFoundError: If the executable is not installed.
        """
        return self._run(cmd, args, env=env, capture=False, input_text=input_text)

    def _run(
        self,
        cmd: str,
        args: Sequence[str],
        *,
        env: Optional[Mapping[str, str]],
        capture: bool,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        argv = [cmd, *args]
        logger.debug("Running (%s): %s", "silent" if capture else "interactive", shlex.join(argv))
        try:
            result = subprocess.run(
                argv,
                capture_output=capture,
                input=input_text,
                text=True,
                env=_merged_env(env),
                check=False,
            )
        except FileNotFoundError as err:
            raise CommandNotFoundError(cmd) from err
        logger.debug("%s exited with %d", cmd, result.returncode)
        if capture:
            return CommandResult(result.returncode, result.stdout or "", result.stderr or "")
        return CommandResult(result.returncode)
