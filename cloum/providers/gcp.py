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

"""GCP / GKE adapter driving the gcloud CLI."""

from __future__ import annotations

from typing import Optional

from cloum import console
from cloum.constants import GCLOUD, GCP_CLUSTER_TABLE_FORMAT, GCP_REGISTRY_SUFFIX, GCP_REPOSITORY_TABLE_FORMAT
from cloum.errors import ConfigError
from cloum.models import CommandResult, DiscoverOptions, GcpCluster, ProviderStatus, RegistryOptions
from cloum.providers.base import ProviderAdapter, count_lines


class GcpAdapter(ProviderAdapter[GcpCluster]):
    provider = "gcp"
    cli = GCLOUD

    # -- gcloud queries --

    def _token_valid(self) -> bool:
        return self.runner.silent(GCLOUD, ["auth", "print-access-token"]).ok

    def _config_value(self, key: str) -> str:
        result = self.runner.silent(GCLOUD, ["config", "get-value", key])
        return result.text if result.ok else ""

    def _interactive_login(self, account: Optional[str]) -> None:
        result = self.login(account)
        if not result.ok:
            raise self.exit_failure("gcloud auth login", result, hint="Run: gcloud auth login")

    def active_project(self) -> Optional[str]:
        """Return the project gcloud is configured with, if any."""
        return self._config_value("project") or None

    # -- connect sequence --

    def targets(self, cluster: GcpCluster) -> list[tuple[str, str]]:
        return [
            ("Target account", cluster.account or "(active)"),
            ("Target project", cluster.project),
            ("Target cluster", cluster.cluster_name),
            ("Target region", cluster.region),
        ]

    def ensure_authenticated(self, cluster: GcpCluster) -> None:
        """Check the access token; log in or switch to the requested account."""
        account = cluster.account
        if not self._token_valid():
            console.print("[yellow]  \U0001f510 Authentication expired — launching gcloud auth login...[/yellow]")
            self._interactive_login(account)
            return

        if not account:
            return
        if self._config_value("account") == account:
            console.print(f"[green]  ✅ gcloud account active: {account}[/green]")
            return

        console.print(f"[yellow]  \U0001f510 Switching gcloud account → {account}[/yellow]")
        switched = self.runner.silent(GCLOUD, ["config", "set", "account", account])
        if not switched.ok:
            raise self.failure("Failed to switch gcloud account", switched)
        if not self._token_valid():
            console.print(f"[yellow]  \U0001f510 Token expired for {account} — launching gcloud auth login...[/yellow]")
            self._interactive_login(account)

    def prepare(self, cluster: GcpCluster) -> None:
        console.print("[yellow]  \U0001f3d7️  Setting GCP project...[/yellow]")
        result = self.runner.silent(GCLOUD, ["config", "set", "project", cluster.project])
        if not result.ok:
            raise self.failure("Failed to set project", result)

    def fetch_credentials(self, cluster: GcpCluster) -> None:
        console.print("[yellow]  ⚙️  Fetching kubeconfig credentials...[/yellow]")
        result = self.runner.interactive(GCLOUD, [
            "container", "clusters", "get-credentials", cluster.cluster_name,
            "--region", cluster.region,
            "--project", cluster.project,
        ])
        if not result.ok:
            raise self.exit_failure("gcloud get-credentials", result)

    def verify_alignment(self, cluster: GcpCluster) -> tuple[bool, list[tuple[str, str]]]:
        account = self._config_value("account")
        project = self._config_value("project")
        account_ok = not cluster.account or account == cluster.account
        project_ok = project == cluster.project
        return account_ok and project_ok, [("GCP Account", account), ("GCP Project", project)]

    # -- other operations --

    def probe_status(self) -> ProviderStatus:
        result = self.runner.silent(GCLOUD, [
            "auth", "list", "--filter=status:ACTIVE", "--format=value(account)",
        ])
        if not result.ok or not result.text:
            return ProviderStatus(self.provider, False)
        project = self._config_value("project")
        return ProviderStatus(
            self.provider,
            True,
            identity=result.text.splitlines()[0],
            details=f"project: {project}" if project else None,
        )

    def discover(self, options: DiscoverOptions) -> None:
        args = ["container", "clusters", "list", f"--format={GCP_CLUSTER_TABLE_FORMAT}"]
        if options.project:
            args += ["--project", options.project]
        result = self.runner.interactive(GCLOUD, args)
        if not result.ok:
            raise self.exit_failure("Discovery", result)

    def registry_login(self, options: RegistryOptions) -> bool:
        if not options.region or not options.project:
            raise ConfigError("--project and --region are required for GCP registry login")
        registry = f"{options.region}{GCP_REGISTRY_SUFFIX}"
        console.print(f"[yellow]  \U0001f433 Configuring Docker for {registry}...[/yellow]")
        result = self.runner.interactive(GCLOUD, ["auth", "configure-docker", registry, "--quiet"])
        if not result.ok:
            raise self.exit_failure("Registry login", result)
        console.print(f"[green]  ✅ Authenticated to {registry} (project: {options.project})[/green]")
        return True

    def list_registries(self, options: RegistryOptions) -> None:
        project = options.project or self.active_project()
        if not project:
            raise ConfigError("--project and --region are required for GCP registry login")
        console.print(f"[yellow]  \U0001f4cb Listing repositories in project {project}...[/yellow]")
        result = self.runner.interactive(GCLOUD, [
            "artifacts", "repositories", "list",
            "--project", project,
            f"--format={GCP_REPOSITORY_TABLE_FORMAT}",
        ])
        if not result.ok:
            raise self.exit_failure("Listing repositories", result)

    def login(self, account: Optional[str] = None) -> CommandResult:
        args = ["auth", "login"]
        if account:
            args += ["--account", account]
        return self.runner.interactive(GCLOUD, args)

    def clean(self) -> bool:
        console.print("[blue]  \U0001f535 Cleaning GCP sessions...[/blue]")
        result = self.runner.silent(GCLOUD, [
            "auth", "list", "--filter=status:ACTIVE", "--format=value(account)",
        ])
        if not result.ok or not count_lines(result.stdout):
            console.print("[dim]     No active GCP accounts found.[/dim]")
            return False
        for account in (line.strip() for line in result.stdout.splitlines() if line.strip()):
            console.print(f"[dim]     Revoking: {account}[/dim]")
            revoked = self.runner.interactive(GCLOUD, ["auth", "revoke", account, "--quiet"])
            if not revoked.ok:
                console.print(f"[yellow]  ⚠️  Could not revoke {account} (exit {revoked.exit_code})[/yellow]")
        console.print("[green]  ✅ GCP credentials revoked[/green]")
        return True
