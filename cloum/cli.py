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

"""
cli.py - command-line entry point for cloum.

Subcommands:
    connect    Connect to a configured cluster
    list       List configured clusters
    status     Show provider authentication and kubectl status
    add        Add a cluster (gcp, aws, azure)
    remove     Remove a cluster
    import     Import clusters from a JSON file
    discover   List clusters visible to a provider CLI
    registry   Log the container engine into cloud registries
    clean      Clear kubectl contexts and provider sessions
    ai         Print (or open) an AI setup prompt
    update     Update to the latest release
    uninstall  Remove cloum

Examples:
    cloum add gcp --name prod-gke --cluster-name my-cluster --region us-central1 --project my-project
    cloum add aws --name staging-eks --cluster-name staging --region us-east-1 --profile staging
    cloum connect prod-gke
    cloum registry all --region us-east-1 --project my-proj --registry myacr
    cloum clean --all

Environment Variables:
    CLOUM_CONFIG_DIR, CLOUM_GITHUB_REPO, CLOUM_RELEASE_TIMEOUT,
    CLOUM_RELEASE_MAX_RETRIES, CLOUM_KUBECTL, CLOUM_DOCKER
"""

from __future__ import annotations

import logging
import sys

import typer
from rich.markup import escape
from typer.core import TyperGroup

from cloum import console, logger
from cloum.commands import (
    add_cmd,
    ai_cmd,
    clean_cmd,
    connect_cmd,
    discover_cmd,
    import_cmd,
    list_cmd,
    registry_cmd,
    remove_cmd,
    status_cmd,
    update_cmd,
)
from cloum.constants import VERSION
from cloum.errors import CloumError, ProviderError


def report_error(err: BaseException) -> None:
    """Print *err* as ``Error: ...`` plus a remediation hint when one is known."""
    logger.debug("Command failed", exc_info=err)
    console.print(f"[red]Error: {escape(str(err))}[/red]")
    if isinstance(err, ProviderError) and err.hint:
        console.print(f"[cyan]Hint: {escape(err.hint)}[/cyan]")


class CloumGroup(TyperGroup):
    """Root group: unknown commands exit 1 and command failures print ``Error:``."""

    def resolve_command(self, ctx: typer.Context, args: list[str]):
        name = args[0] if args else ""
        if name and not name.startswith("-") and not ctx.resilient_parsing \
                and self.get_command(ctx, name) is None:
            console.print(f'[red]Unknown command: "{escape(name)}"[/red]')
            typer.echo(ctx.get_help())
            ctx.exit(1)
        return super().resolve_command(ctx, args)

    def invoke(self, ctx: typer.Context):
        try:
            return super().invoke(ctx)
        except (CloumError, OSError) as err:
            report_error(err)
            raise typer.Exit(1) from err


app = typer.Typer(
    cls=CloumGroup,
    help="Manage Kubernetes cluster connections across GCP, AWS and Azure.",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    pretty_exceptions_enable=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cloum v{VERSION}")
        raise typer.Exit()


@app.callback()
def _main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", callback=_version_callback, is_eager=True, help="Show version and exit"),
    debug: bool = typer.Option(False, "--debug", help="Log every external command"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("connect")(connect_cmd.connect)
app.command("list")(list_cmd.list_clusters)
app.command("status")(status_cmd.status)
app.add_typer(add_cmd.app, name="add")
app.command("remove")(remove_cmd.remove)
app.command("import")(import_cmd.import_clusters)
app.add_typer(discover_cmd.app, name="discover")
app.add_typer(registry_cmd.app, name="registry")
app.command("clean")(clean_cmd.clean)
app.command("ai")(ai_cmd.ai)
app.command("update")(update_cmd.update)
app.command("uninstall")(update_cmd.uninstall)


@app.command("version")
def show_version() -> None:
    """Show version."""
    typer.echo(f"cloum v{VERSION}")


@app.command("help")
def show_help(ctx: typer.Context) -> None:
    """Show this help message."""
    typer.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


def main() -> None:
    try:
        app(prog_name="cloum")
    except Exception as e:
        report_error(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
