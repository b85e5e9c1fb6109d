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

"""Add subcommands (gcp, aws, azure)."""

from __future__ import annotations

import re

import typer
from pydantic import ValidationError

from cloum import console
from cloum.commands import get_context
from cloum.errors import ConfigError
from cloum.models import AwsCluster, AzureCluster, ClusterRecord, GcpCluster

app = typer.Typer(help="Add a cluster definition to the config.", no_args_is_help=True)


def _flag_name(field: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", field).replace("_", "-").lower()


def _build(model: type[ClusterRecord], **fields: object) -> ClusterRecord:
    values = {key: value for key, value in fields.items() if value is not None}
    try:
        return model(**values)
    except ValidationError as err:
        first = err.errors()[0]
        field = _flag_name(str(first["loc"][0])) if first.get("loc") else "value"
        raise ConfigError(f"--{field}: {first['msg']}") from err


def _save(ctx: typer.Context, record: ClusterRecord) -> None:
    get_context(ctx).store.add(record)
    console.print(f'[green]✓ Added cluster "{record.name}" ({record.provider}) to config.[/green]')
    console.print(f"[cyan]  Connect with: cloum connect {record.name}[/cyan]")


@app.command()
def gcp(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Alias used with cloum connect"),
    cluster_name: str = typer.Option(..., "--cluster-name", help="GKE cluster name"),
    region: str = typer.Option(..., "--region", help="Cluster region or zone"),
    project: str = typer.Option(..., "--project", help="GCP project ID"),
    account: str | None = typer.Option(None, "--account", help="gcloud account to activate"),
) -> None:
    """Add a GKE cluster."""
    _save(ctx, _build(
        GcpCluster, name=name, cluster_name=cluster_name, region=region,
        project=project, account=account,
    ))


@app.command()
def aws(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Alias used with cloum connect"),
    cluster_name: str = typer.Option(..., "--cluster-name", help="EKS cluster name"),
    region: str = typer.Option(..., "--region", help="AWS region"),
    profile: str | None = typer.Option(None, "--profile", help="Named AWS profile"),
    role_arn: str | None = typer.Option(None, "--role-arn", help="IAM role to assume"),
) -> None:
    """Add an EKS cluster."""
    _save(ctx, _build(
        AwsCluster, name=name, cluster_name=cluster_name, region=region,
        profile=profile, role_arn=role_arn,
    ))


@app.command()
def azure(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Alias used with cloum connect"),
    cluster_name: str = typer.Option(..., "--cluster-name", help="AKS cluster name"),
    region: str = typer.Option(..., "--region", help="Azure location"),
    resource_group: str = typer.Option(..., "--resource-group", help="Resource group of the cluster"),
    subscription: str | None = typer.Option(None, "--subscription", help="Subscription name or ID"),
) -> None:
    """Add an AKS cluster."""
    _save(ctx, _build(
        AzureCluster, name=name, cluster_name=cluster_name, region=region,
        resource_group=resource_group, subscription=subscription,
    ))
