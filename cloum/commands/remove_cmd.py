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

"""Remove command."""

from __future__ import annotations

import typer

from cloum import console
from cloum.commands import get_context


def remove(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the cluster to remove"),
) -> None:
    """Remove a cluster definition from the config."""
    get_context(ctx).store.remove(name)
    console.print(f'[green]✓ Removed cluster "{name}" from config.[/green]')
