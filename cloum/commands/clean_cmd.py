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

"""Clean command: drop kubectl contexts and cached provider sessions."""

from __future__ import annotations

from enum import Enum

import typer
from rich.panel import Panel

from cloum import console
from cloum.commands import AppContext, get_context
from cloum.constants import PROVIDERS
from cloum.errors import CommandNotFoundError
from cloum.orchestrator import run_parallel


class CleanTarget(str, Enum):
    gcp = "gcp"
    aws = "aws"
    azure = "azure"


def clean_kubeconfig(app_ctx: AppContext) -> int:
    """Delete every kubectl context and its cluster entry. Returns the count."""
    runner, kubectl = app_ctx.runner, app_ctx.settings.kubectl
    console.print("[cyan]  ⚙️  Cleaning kubectl contexts...[/cyan]")
    result = runner.silent(kubectl, ["config", "get-contexts", "--output=name"])
    contexts = [line.strip() for line in result.stdout.splitlines() if line.strip()] if result.ok else []
    if not contexts:
        console.print("[dim]     No kubectl contexts found.[/dim]")
        return 0
    console.print(f"[dim]     Removing {len(contexts)} context(s)...[/dim]")
    for context in contexts:
        runner.silent(kubectl, ["config", "delete-context", context])
        runner.silent(kubectl, ["config", "delete-cluster", context])
    console.print("[green]  ✅ kubectl contexts cleared[/green]")
    return len(contexts)


def _clean_provider(app_ctx: AppContext, provider: str) -> bool:
    adapter = app_ctx.adapter(provider)
    try:
        return adapter.clean()
    except CommandNotFoundError:
        console.print(f"[dim]     {adapter.cli} not installed, nothing to clean.[/dim]")
        return False


def clean(
    ctx: typer.Context,
    provider: CleanTarget | None = typer.Argument(None, help="Provider whose sessions to revoke"),
    all_providers: bool = typer.Option(False, "--all", help="Revoke sessions of every provider"),
) -> None:
    """Clear kubectl contexts, and optionally cached provider credentials.

    With no arguments only kubectl contexts are removed. Naming a provider
    also revokes its sessions; --all revokes all three concurrently.
    """
    app_ctx = get_context(ctx)
    console.print(Panel.fit("\U0001f9f9 Cleaning cloud sessions", style="bold yellow"))

    if provider is not None:
        _clean_provider(app_ctx, provider.value)
    elif all_providers:
        run_parallel({p: (lambda p=p: _clean_provider(app_ctx, p)) for p in PROVIDERS})

    try:
        clean_kubeconfig(app_ctx)
    except CommandNotFoundError:
        console.print(f"[dim]     {app_ctx.settings.kubectl} not installed, no contexts to clean.[/dim]")

    if provider is None and not all_providers:
        console.print('[dim]\n  Tip: Use "cloum clean --all" to also revoke cloud provider credentials.[/dim]')
        console.print('[dim]       Or target a provider: "cloum clean gcp|aws|azure"[/dim]')
    console.print("\n[green]✅ Done.[/green]")
