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

"""Connect command."""

from __future__ import annotations

import typer
from rich.panel import Panel

from cloum import console
from cloum.commands import get_context
from cloum.constants import PROVIDER_BANNER


def connect(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of a configured cluster"),
) -> None:
    """Authenticate and switch kubectl to a configured cluster."""
    app_ctx = get_context(ctx)
    cluster = app_ctx.store.find_by_name(name)
    console.print(Panel.fit(
        f"\U0001f504 Connecting to {PROVIDER_BANNER[cluster.provider]} cluster: {cluster.name}",
        style="bold blue",
    ))
    app_ctx.adapter(cluster.provider).connect(cluster)
    console.print(f'\n[green]✅ Successfully connected to cluster "{cluster.name}"[/green]')
    console.print(f"[cyan]   Run: {app_ctx.settings.kubectl} get nodes[/cyan]")
