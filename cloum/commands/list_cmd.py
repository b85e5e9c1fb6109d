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

"""List command."""

from __future__ import annotations

import typer
from rich.table import Table

from cloum import console
from cloum.commands import get_context
from cloum.constants import PROVIDER_LABEL
from cloum.models import AwsCluster, AzureCluster, ClusterRecord, GcpCluster


def cluster_details(cluster: ClusterRecord) -> str:
    """Short provider-specific detail shown next to each cluster."""
    if isinstance(cluster, GcpCluster):
        return f"project={cluster.project}"
    if isinstance(cluster, AwsCluster):
        return f"profile={cluster.profile}" if cluster.profile else "default profile"
    if isinstance(cluster, AzureCluster):
        return f"rg={cluster.resource_group}"
    raise TypeError(f"Unsupported cluster record: {type(cluster).__name__}")


def list_clusters(ctx: typer.Context) -> None:
    """List all configured clusters."""
    app_ctx = get_context(ctx)
    clusters = app_ctx.store.load()
    config_path = app_ctx.store.path
    if not clusters:
        console.print("[yellow]No clusters configured.[/yellow]")
        console.print(f"[dim]Config file: {config_path}[/dim]")
        console.print("\n[cyan]Add a cluster with: cloum add <provider> --help[/cyan]")
        return

    table = Table(title=f"Configured clusters ({len(clusters)})", title_justify="left")
    table.add_column("NAME", style="bold", overflow="fold")
    table.add_column("PROVIDER")
    table.add_column("REGION", overflow="fold")
    table.add_column("DETAILS", overflow="fold")
    for cluster in clusters:
        table.add_row(
            cluster.name,
            PROVIDER_LABEL.get(cluster.provider, cluster.provider),
            cluster.region,
            cluster_details(cluster),
        )
    console.print(table)
    console.print(f"\n[dim]Config: {config_path}[/dim]")
