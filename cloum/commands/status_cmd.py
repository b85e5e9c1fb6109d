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

"""Status command: provider authentication and the active kubectl context."""

from __future__ import annotations

import typer
from rich.panel import Panel
from rich.table import Table

from cloum import console
from cloum.commands import AppContext, get_context
from cloum.constants import PROVIDER_STATUS_LABEL, PROVIDERS
from cloum.errors import CommandNotFoundError
from cloum.models import ProviderStatus
from cloum.orchestrator import run_parallel
from cloum.providers import count_lines


def probe_providers(app_ctx: AppContext) -> list[ProviderStatus]:
    """Probe the three providers concurrently, in provider order."""
    adapters = {provider: app_ctx.adapter(provider) for provider in PROVIDERS}
    results = run_parallel({provider: adapter.status for provider, adapter in adapters.items()})
    return [results[provider] for provider in PROVIDERS]


def _status_table(statuses: list[ProviderStatus]) -> Table:
    table = Table(title="Cloud Providers", title_justify="left")
    table.add_column("PROVIDER")
    table.add_column("STATUS")
    table.add_column("IDENTITY", overflow="fold")
    table.add_column("DETAILS", overflow="fold", style="dim")
    for status in statuses:
        label = PROVIDER_STATUS_LABEL.get(status.provider, status.provider.upper())
        state = "[green]✅ authenticated[/green]" if status.authenticated else "[red]✗ not authenticated[/red]"
        table.add_row(label, state, status.identity or "", status.details or "")
    return table


def _kubectl_status(app_ctx: AppContext) -> None:
    runner, kubectl = app_ctx.runner, app_ctx.settings.kubectl
    console.print("\n[cyan]⚙️  Kubernetes:[/cyan]")
    ctx = runner.silent(kubectl, ["config", "current-context"])
    if not ctx.ok or not ctx.text:
        console.print("[red]  ✗  No active context[/red]")
        return

    namespace = runner.silent(kubectl, [
        "config", "view", "--minify", "--output", "jsonpath={..namespace}",
    ])
    cluster = runner.silent(kubectl, [
        "config", "view", "--minify", "--output", "jsonpath={.context.cluster}",
    ])
    console.print(f"[green]  ✅ Context   : {ctx.text}[/green]")
    console.print(f"     Cluster  : {cluster.text or '(unknown)'}")
    console.print(f"     Namespace: {namespace.text or 'default'}")

    nodes = runner.silent(kubectl, ["get", "nodes", "--no-headers"])
    node_count = count_lines(nodes.stdout)
    if nodes.ok and node_count > 0:
        console.print(f"     Status   : [green]✅ Reachable ({node_count} node(s))[/green]")
    else:
        console.print("     Status   : [yellow]⚠️  Not reachable[/yellow]")


def status(ctx: typer.Context) -> None:
    """Show authentication status for every provider and kubectl."""
    app_ctx = get_context(ctx)
    console.print(Panel.fit("\U0001f50d Cloud Provider Authentication Status", style="bold blue"))
    console.print(_status_table(probe_providers(app_ctx)))
    try:
        _kubectl_status(app_ctx)
    except CommandNotFoundError:
        console.print(f"[red]  ✗  {app_ctx.settings.kubectl} not installed[/red]")
