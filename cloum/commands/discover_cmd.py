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

"""Discover subcommands: list clusters visible to each provider CLI."""

from __future__ import annotations

import typer

from cloum import console
from cloum.commands import get_context
from cloum.models import DiscoverOptions

app = typer.Typer(help="Discover clusters from a cloud provider.", no_args_is_help=True)


def _discover(ctx: typer.Context, provider: str, options: DiscoverOptions) -> None:
    console.print(f"\n[cyan]Discovering {provider.upper()} clusters...[/cyan]\n")
    get_context(ctx).adapter(provider).discover(options)
    console.print(f'\n[dim]Use "cloum add {provider} ..." to add discovered clusters to your config.[/dim]')


@app.command()
def gcp(
    ctx: typer.Context,
    project: str | None = typer.Option(None, "--project", help="GCP project to list"),
) -> None:
    """List GKE clusters."""
    _discover(ctx, "gcp", DiscoverOptions(project=project))


@app.command()
def aws(
    ctx: typer.Context,
    region: str | None = typer.Option(None, "--region", help="AWS region to list"),
    profile: str | None = typer.Option(None, "--profile", help="Named AWS profile"),
) -> None:
    """List EKS clusters."""
    _discover(ctx, "aws", DiscoverOptions(region=region, profile=profile))


@app.command()
def azure(
    ctx: typer.Context,
    resource_group: str | None = typer.Option(None, "--resource-group", help="Restrict to one resource group"),
) -> None:
    """List AKS clusters."""
    _discover(ctx, "azure", DiscoverOptions(resource_group=resource_group))
