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

"""Registry subcommands: log the container engine into provider registries."""

from __future__ import annotations

import typer
from rich.panel import Panel

from cloum import console
from cloum.commands import AppContext, get_context
from cloum.constants import PROVIDERS
from cloum.errors import CloumError, ConfigError
from cloum.models import RegistryOptions
from cloum.orchestrator import run_parallel

app = typer.Typer(help="Log the container engine into cloud registries.", no_args_is_help=True)

_BRANCH_TITLE = {
    "gcp": "[blue]\n  \U0001f535 GCP Artifact Registry[/blue]",
    "aws": "[dark_orange]\n  \U0001f7e0 AWS ECR[/dark_orange]",
    "azure": "[blue]\n  \U0001f535 Azure ACR[/blue]",
}


def _banner() -> None:
    console.print(Panel.fit("\U0001f433 Container Registry Login", style="bold blue"))


def _missing_inputs(provider: str, options: RegistryOptions) -> str | None:
    if provider == "gcp" and (not options.region or not options.project):
        return "--region and --project"
    if provider == "aws" and not options.region:
        return "--region"
    return None


def login_branch(app_ctx: AppContext, provider: str, options: RegistryOptions) -> bool:
    """One branch of ``registry all``; never raises for provider failures."""
    console.print(_BRANCH_TITLE[provider])
    missing = _missing_inputs(provider, options)
    if missing:
        console.print(f"[yellow]     ⚠️  Skipped — requires {missing}[/yellow]")
        return False
    try:
        return app_ctx.adapter(provider).registry_login(options)
    except CloumError as err:
        console.print(f"[red]     ❌ Failed: {err}[/red]")
        return False


def login_all(app_ctx: AppContext, options: RegistryOptions) -> int:
    """Run the three registry logins concurrently and return how many succeeded."""
    console.print("[yellow]  Logging into all cloud registries...[/yellow]")
    results = run_parallel({
        provider: (lambda p=provider: login_branch(app_ctx, p, options))
        for provider in PROVIDERS
    })
    count = sum(1 for ok in results.values() if ok)
    if count == len(PROVIDERS):
        console.print(f"\n[green]  \U0001f389 All {count} registries authenticated successfully![/green]")
    else:
        console.print(
            f"\n[yellow]  ⚠️  {count}/{len(PROVIDERS)} registries authenticated. "
            "Check output above for details.[/yellow]"
        )
    return count


@app.command()
def gcp(
    ctx: typer.Context,
    project: str | None = typer.Option(None, "--project", help="GCP project ID"),
    region: str | None = typer.Option(None, "--region", help="Artifact Registry region"),
) -> None:
    """Configure Docker for GCP Artifact Registry.

    Without --project, lists the repositories of the active gcloud project.
    """
    app_ctx = get_context(ctx)
    adapter = app_ctx.adapter("gcp")
    _banner()
    if not project:
        adapter.list_registries(RegistryOptions())
        console.print("[dim]\n  Use --project <id> --region <region> to login.[/dim]")
        return
    if not region:
        raise ConfigError("--region is required for GCP registry login")
    adapter.registry_login(RegistryOptions(region=region, project=project))


@app.command()
def aws(
    ctx: typer.Context,
    region: str | None = typer.Option(None, "--region", help="ECR region"),
    profile: str | None = typer.Option(None, "--profile", help="Named AWS profile"),
) -> None:
    """Log Docker into AWS ECR."""
    app_ctx = get_context(ctx)
    _banner()
    app_ctx.adapter("aws").registry_login(RegistryOptions(region=region, profile=profile))


@app.command()
def azure(
    ctx: typer.Context,
    registry: str | None = typer.Option(None, "--registry", help="ACR registry name"),
) -> None:
    """Log Docker into Azure Container Registry, or list registries."""
    app_ctx = get_context(ctx)
    _banner()
    app_ctx.adapter("azure").registry_login(RegistryOptions(registry=registry))


@app.command("all")
def all_registries(
    ctx: typer.Context,
    region: str | None = typer.Option(None, "--region", help="Region for GCP and AWS"),
    project: str | None = typer.Option(None, "--project", help="GCP project ID"),
    profile: str | None = typer.Option(None, "--profile", help="Named AWS profile"),
    registry: str | None = typer.Option(None, "--registry", help="ACR registry name"),
) -> None:
    """Log into every provider registry the given flags allow."""
    app_ctx = get_context(ctx)
    _banner()
    login_all(app_ctx, RegistryOptions(region=region, project=project, profile=profile, registry=registry))
