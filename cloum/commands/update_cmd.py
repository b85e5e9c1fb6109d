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

"""Update and uninstall commands."""

from __future__ import annotations

import typer

from cloum import console
from cloum.commands import AppContext, get_context
from cloum.constants import VERSION
from cloum.errors import CloumError
from cloum.updater import fetch_latest_release, plan_update, run_install_script


def _install(app_ctx: AppContext, uninstall: bool = False) -> None:
    verb = "Uninstall" if uninstall else "Update"
    console.print(f"[yellow]\n⬇️  Running {verb.lower()} script...[/yellow]")
    result = run_install_script(app_ctx.runner, app_ctx.settings.github_repo, uninstall=uninstall)
    if not result.ok:
        raise CloumError(f"{verb} script failed with code {result.exit_code}")
    console.print(f"[green]\n✅ {verb} complete![/green]")


def update(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Reinstall even when already up to date"),
) -> None:
    """Update cloum to the latest release."""
    app_ctx = get_context(ctx)
    settings = app_ctx.settings
    console.print("[cyan]\n\U0001f504 Checking for updates...[/cyan]")
    console.print(f"   Current version: {VERSION}")

    latest = fetch_latest_release(
        settings.github_repo, timeout=settings.release_timeout, max_retries=settings.release_max_retries,
    )
    if latest is None:
        console.print("[yellow]   Could not fetch release info. Using fallback.[/yellow]")
        _install(app_ctx)
        return

    console.print(f"   Latest version: {latest}")
    action = plan_update(VERSION, latest, force=force)
    if action == "latest":
        console.print("[green]\n✅ You are on the latest version![/green]")
        return
    if action == "newer":
        console.print("[yellow]\n⚠️  You are on a newer version than latest release.[/yellow]")
        return

    console.print(f"[yellow]\n⬆️  Updating to v{latest}...[/yellow]")
    _install(app_ctx)


def uninstall(ctx: typer.Context) -> None:
    """Remove cloum from this machine."""
    _install(get_context(ctx), uninstall=True)
