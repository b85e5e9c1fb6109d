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

"""Import command: merge clusters from another clusters file."""

from __future__ import annotations

from pathlib import Path

import typer

from cloum import console
from cloum.commands import get_context
from cloum.store import read_clusters_file


def import_clusters(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help='JSON file shaped like {"clusters": [...]}'),
) -> None:
    """Import clusters from a JSON file, skipping names that already exist.

    The file is validated as a whole first; any invalid entry aborts the
    import without touching the config.
    """
    store = get_context(ctx).store
    incoming = read_clusters_file(file)
    summary = store.merge(incoming)

    console.print("\n[cyan]\U0001f4e5 Import Summary:[/cyan]")
    console.print(f"   Added: {len(summary.added)} cluster(s)")
    if summary.skipped:
        console.print(f"[yellow]   Skipped (already exist): {len(summary.skipped)}[/yellow]")
        for name in summary.skipped:
            console.print(f"      - {name}")
    console.print(f"\n[green]✅ Clusters saved to: {store.path}[/green]")
    console.print(f"   Total configured: {len(store.load())}")
