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

"""Adapter contract and the connect sequence shared by all providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Optional, TypeVar

from cloum import console
from cloum.constants import DEFAULT_DOCKER, DEFAULT_KUBECTL
from cloum.errors import ClassifiedError, CommandNotFoundError, ProviderError, classify
from cloum.models import CommandResult, DiscoverOptions, ProviderStatus, RegistryOptions
from cloum.runner import ProcessRunner

ClusterT = TypeVar("ClusterT")


def count_lines(text: str) -> int:
    """Count non-empty lines of command output."""
    return sum(1 for line in text.splitlines() if line.strip())


def probe_nodes(runner: ProcessRunner, kubectl: str = DEFAULT_KUBECTL) -> int:
    """Return the number of nodes the current context lists, 0 when unreachable."""
    try:
        nodes = runner.silent(kubectl, ["get", "nodes", "--no-headers"])
    except CommandNotFoundError:
        return 0
    return count_lines(nodes.stdout) if nodes.ok else 0


def current_context(runner: ProcessRunner, kubectl: str = DEFAULT_KUBECTL) -> str:
    """Return the active kubeconfig context name, or an empty string."""
    try:
        ctx = runner.silent(kubectl, ["config", "current-context"])
    except CommandNotFoundError:
        return ""
    return ctx.text if ctx.ok else ""


class ProviderAdapter(ABC, Generic[ClusterT]):
    """Translates connect/status/discover/registry operations into CLI calls.

    ``connect`` runs a fixed sequence. Steps 2-4 (authentication, provider
    setup, credential fetch) raise :class:`ProviderError` on failure. The
    alignment check and the reachability probe only print warnings.
    """

    provider: ClassVar[str]
    cli: ClassVar[str]

    def __init__(
        self,
        runner: ProcessRunner,
        kubectl: str = DEFAULT_KUBECTL,
        docker: str = DEFAULT_DOCKER,
    ) -> None:
        self.runner = runner
        self.kubectl = kubectl
        self.docker = docker

    # ------------------------------------------------------------------
    # Connect sequence
    # ------------------------------------------------------------------

    def connect(self, cluster: ClusterT) -> None:
        """Authenticate, fetch credentials and verify the cluster context.

        Raises:
            CommandNotFoundError: If the provider CLI or kubectl is missing.
            ProviderError: If authentication, setup or credential fetch fails.
        """
        self.runner.require(self.cli, self.kubectl)
        for label, value in self.targets(cluster):
            console.print(f"[blue]  {label:<22}: {value}[/blue]")
        console.print()

        self.ensure_authenticated(cluster)
        self.prepare(cluster)
        self.fetch_credentials(cluster)

        console.print("[yellow]  \U0001f50d Verifying authentication alignment...[/yellow]")
        aligned, summary = self.verify_alignment(cluster)
        if aligned:
            console.print("[green]  ✅ Authentication properly aligned[/green]")
        else:
            console.print("[yellow]  ⚠️  Authentication may not be fully aligned[/yellow]")

        console.print("[yellow]  \U0001f50d Testing cluster connection...[/yellow]")
        node_count = probe_nodes(self.runner, self.kubectl)
        if node_count > 0:
            console.print(f"[green]  ✅ Cluster reachable — {node_count} node(s) available[/green]")
        else:
            console.print("[yellow]  ⚠️  Cluster not immediately reachable (may still be propagating)[/yellow]")

        summary.append(("K8s Context", current_context(self.runner, self.kubectl)))
        console.print()
        console.print("[cyan]  \U0001f4ca Final Status:[/cyan]")
        width = max(len(label) for label, _ in summary)
        for label, value in summary:
            console.print(f"[dim]     {label:<{width}} : {value or 'unknown'}[/dim]")

    @abstractmethod
    def targets(self, cluster: ClusterT) -> list[tuple[str, str]]:
        """Identifiers printed before anything runs."""

    @abstractmethod
    def ensure_authenticated(self, cluster: ClusterT) -> None:
        """Validate credentials, logging in or switching identity as needed."""

    def prepare(self, cluster: ClusterT) -> None:
        """Provider-specific environment setup before fetching credentials."""

    @abstractmethod
    def fetch_credentials(self, cluster: ClusterT) -> None:
        """Merge the cluster into the kubeconfig."""

    @abstractmethod
    def verify_alignment(self, cluster: ClusterT) -> tuple[bool, list[tuple[str, str]]]:
        """Compare active identity with the request; return (aligned, summary rows)."""

    # ------------------------------------------------------------------
    # Other operations
    # ------------------------------------------------------------------

    def status(self) -> ProviderStatus:
        """Probe authentication without raising."""
        try:
            return self.probe_status()
        except (CommandNotFoundError, OSError):
            return ProviderStatus(self.provider, False, details=f"{self.cli} not installed")

    @abstractmethod
    def probe_status(self) -> ProviderStatus:
        """Run the identity query behind :meth:`status`."""

    @abstractmethod
    def discover(self, options: DiscoverOptions) -> None:
        """Print the provider's cluster table."""

    @abstractmethod
    def registry_login(self, options: RegistryOptions) -> bool:
        """Log the container engine into the provider registry.

        Returns:
            True when a login happened, False when only a listing was shown.
        """

    @abstractmethod
    def login(self) -> CommandResult:
        """Run the provider's interactive login."""

    @abstractmethod
    def clean(self) -> bool:
        """Revoke cached provider credentials. Returns True if anything was cleared."""

    def list_registries(self, options: RegistryOptions) -> None:
        raise ProviderError(self.provider, f"Registry listing is not supported for {self.provider}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def failure(self, action: str, result: CommandResult) -> ProviderError:
        """Build a classified error for a failed silent command."""
        classified = classify(self.provider, result.stderr)
        return ProviderError(self.provider, f"{action}: {classified.message}", classified)

    def exit_failure(self, action: str, result: CommandResult, hint: Optional[str] = None) -> ProviderError:
        """Build an error for a failed interactive command (no stderr captured)."""
        classified = ClassifiedError(f"{action} failed (exit {result.exit_code})", hint) if hint else None
        return ProviderError(self.provider, f"{action} failed (exit {result.exit_code})", classified)
