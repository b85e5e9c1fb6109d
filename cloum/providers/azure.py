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

"""Azure / AKS adapter driving the az CLI."""

from __future__ import annotations

from cloum import console
from cloum.constants import ACR_LIST_QUERY, ACR_REGISTRY_SUFFIX, AZ
from cloum.errors import ClassifiedError, ProviderError
from cloum.models import AzureCluster, CommandResult, DiscoverOptions, ProviderStatus, RegistryOptions
from cloum.providers.base import ProviderAdapter


class AzureAdapter(ProviderAdapter[AzureCluster]):
    provider = "azure"
    cli = AZ

    def _account_field(self, query: str) -> str:
        result = self.runner.silent(AZ, ["account", "show", "--query", query, "--output", "tsv"])
        return result.text if result.ok else ""

    # -- connect sequence --

    def targets(self, cluster: AzureCluster) -> list[tuple[str, str]]:
        rows = [
            ("Target cluster", cluster.cluster_name),
            ("Target resource group", cluster.resource_group),
            ("Target region", cluster.region),
        ]
        if cluster.subscription:
            rows.append(("Target subscription", cluster.subscription))
        return rows

    def ensure_authenticated(self, cluster: AzureCluster) -> None:
        console.print("[yellow]  \U0001f510 Verifying Azure authentication...[/yellow]")
        account = self.runner.silent(AZ, ["account", "show", "--query", "name", "--output", "tsv"])
        if account.ok:
            console.print(f"[green]  ✅ Azure subscription: {account.text}[/green]")
            return
        console.print("[yellow]  \U0001f510 Not authenticated — launching az login...[/yellow]")
        login = self.login()
        if not login.ok:
            raise self.exit_failure("Azure login", login, hint="Run: az login")

    def prepare(self, cluster: AzureCluster) -> None:
        """Activate the requested subscription, then check the cluster exists."""
        if cluster.subscription:
            console.print(f"[yellow]  \U0001f510 Setting Azure subscription → {cluster.subscription}[/yellow]")
            result = self.runner.silent(AZ, ["account", "set", "--subscription", cluster.subscription])
            if not result.ok:
                raise self.failure("Failed to set subscription", result)

        console.print("[yellow]  \U0001f50d Verifying AKS cluster exists...[/yellow]")
        check = self.runner.silent(AZ, [
            "aks", "show",
            "--resource-group", cluster.resource_group,
            "--name", cluster.cluster_name,
            "--query", "name",
            "--output", "tsv",
        ])
        if not check.ok:
            message = (
                f'AKS cluster "{cluster.cluster_name}" not found in resource group '
                f'"{cluster.resource_group}"'
            )
            hint = (
                f"Run: az aks list --resource-group {cluster.resource_group} "
                '--query "[].name" --output tsv'
            )
            raise ProviderError(self.provider, message, ClassifiedError(message, hint))
        console.print(f"[green]  ✅ AKS cluster verified: {check.text}[/green]")

    def fetch_credentials(self, cluster: AzureCluster) -> None:
        console.print("[yellow]  ⚙️  Fetching kubeconfig credentials...[/yellow]")
        result = self.runner.interactive(AZ, [
            "aks", "get-credentials",
            "--resource-group", cluster.resource_group,
            "--name", cluster.cluster_name,
            "--overwrite-existing",
        ])
        if not result.ok:
            raise self.exit_failure("az aks get-credentials", result)

    def verify_alignment(self, cluster: AzureCluster) -> tuple[bool, list[tuple[str, str]]]:
        name = self._account_field("name")
        sub_id = self._account_field("id")
        tenant = self._account_field("tenantId")
        aligned = bool(name) and (not cluster.subscription or cluster.subscription in (name, sub_id))
        summary = [
            ("Azure Subscription", name),
            ("Azure Tenant", tenant),
            ("Resource Group", cluster.resource_group),
        ]
        return aligned, summary

    # -- other operations --

    def probe_status(self) -> ProviderStatus:
        user = self.runner.silent(AZ, ["account", "show", "--query", "user.name", "--output", "tsv"])
        if not user.ok or not user.text:
            return ProviderStatus(self.provider, False)
        subscription = self._account_field("name")
        return ProviderStatus(
            self.provider,
            True,
            identity=user.text,
            details=f"subscription: {subscription}" if subscription else None,
        )

    def discover(self, options: DiscoverOptions) -> None:
        args = ["aks", "list", "--output", "table"]
        if options.resource_group:
            args += ["--resource-group", options.resource_group]
        result = self.runner.interactive(AZ, args)
        if not result.ok:
            raise self.exit_failure("Discovery", result)

    def registry_login(self, options: RegistryOptions) -> bool:
        """Log into an ACR registry, or list registries when none is named."""
        if not options.registry:
            self.list_registries(options)
            console.print("[dim]     Use --registry <name> to login to a specific registry.[/dim]")
            return False
        server = f"{options.registry}{ACR_REGISTRY_SUFFIX}"
        console.print(f"[yellow]  \U0001f433 Logging Docker into {server}...[/yellow]")
        result = self.runner.interactive(AZ, ["acr", "login", "--name", options.registry])
        if not result.ok:
            raise self.exit_failure("ACR login", result)
        console.print(f"[green]  ✅ Authenticated to {server}[/green]")
        return True

    def list_registries(self, options: RegistryOptions) -> None:
        console.print("[yellow]  \U0001f4cb Listing Azure Container Registries...[/yellow]")
        result = self.runner.interactive(AZ, [
            "acr", "list", "--query", ACR_LIST_QUERY, "--output", "table",
        ])
        if not result.ok:
            raise self.exit_failure("Listing ACR registries", result)

    def login(self) -> CommandResult:
        return self.runner.interactive(AZ, ["login"])

    def clean(self) -> bool:
        console.print("[blue]  \U0001f535 Cleaning Azure sessions...[/blue]")
        result = self.runner.silent(AZ, ["logout"])
        if result.ok:
            console.print("[green]  ✅ Azure session cleared[/green]")
            return True
        console.print(f"[dim]     az logout: {result.stderr.strip() or 'no active session'}[/dim]")
        return False
