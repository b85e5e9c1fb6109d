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

"""AWS / EKS adapter driving the aws CLI.

A configured profile is never written to global AWS config; every aws call
receives it as ``AWS_PROFILE`` in an environment override instead.
"""

from __future__ import annotations

import os
from typing import Optional

from cloum import console
from cloum.constants import AWS, ECR_REGISTRY_TEMPLATE, ECR_USERNAME
from cloum.errors import ConfigError
from cloum.models import AwsCluster, CommandResult, DiscoverOptions, ProviderStatus, RegistryOptions
from cloum.providers.base import ProviderAdapter

_ACCOUNT_QUERY = ["sts", "get-caller-identity", "--query", "Account", "--output", "text"]


def profile_env(profile: Optional[str]) -> dict[str, str]:
    """Environment overrides that select *profile* for one aws invocation."""
    return {"AWS_PROFILE": profile} if profile else {}


class AwsAdapter(ProviderAdapter[AwsCluster]):
    provider = "aws"
    cli = AWS

    def _account(self, profile: Optional[str]) -> CommandResult:
        return self.runner.silent(AWS, _ACCOUNT_QUERY, env=profile_env(profile))

    # -- connect sequence --

    def targets(self, cluster: AwsCluster) -> list[tuple[str, str]]:
        rows = [
            ("Target profile", cluster.profile or "(default)"),
            ("Target cluster", cluster.cluster_name),
            ("Target region", cluster.region),
        ]
        if cluster.role_arn:
            rows.append(("Assume role", cluster.role_arn))
        return rows

    def ensure_authenticated(self, cluster: AwsCluster) -> None:
        """Verify the profile's session, launching ``aws sso login`` when it has expired."""
        if not cluster.profile:
            return
        console.print(f"[yellow]  \U0001f510 Verifying AWS profile: {cluster.profile}...[/yellow]")
        identity = self._account(cluster.profile)
        if identity.ok:
            console.print(f"[green]  ✅ AWS account verified: {identity.text}[/green]")
            return
        console.print("[yellow]  \U0001f510 SSO session expired — launching aws sso login...[/yellow]")
        login = self.login(cluster.profile)
        if not login.ok:
            raise self.exit_failure(
                "aws sso login", login, hint=f"Run: aws sso login --profile {cluster.profile}",
            )

    def fetch_credentials(self, cluster: AwsCluster) -> None:
        args = [
            "eks", "update-kubeconfig",
            "--name", cluster.cluster_name,
            "--region", cluster.region,
        ]
        if cluster.role_arn:
            args += ["--role-arn", cluster.role_arn]
        console.print("[yellow]  ⚙️  Updating kubeconfig for EKS cluster...[/yellow]")
        result = self.runner.interactive(AWS, args, env=profile_env(cluster.profile))
        if not result.ok:
            raise self.exit_failure("aws eks update-kubeconfig", result)

    def verify_alignment(self, cluster: AwsCluster) -> tuple[bool, list[tuple[str, str]]]:
        identity = self._account(cluster.profile)
        summary = [
            ("AWS Profile", cluster.profile or "default"),
            ("AWS Account", identity.text if identity.ok else ""),
            ("AWS Region", cluster.region),
        ]
        return identity.ok and bool(identity.text), summary

    # -- other operations --

    def probe_status(self) -> ProviderStatus:
        result = self.runner.silent(AWS, [
            "sts", "get-caller-identity", "--query", "Arn", "--output", "text",
        ])
        if not result.ok or not result.text:
            return ProviderStatus(self.provider, False)
        profile = os.environ.get("AWS_PROFILE")
        return ProviderStatus(
            self.provider,
            True,
            identity=result.text,
            details=f"profile: {profile}" if profile else None,
        )

    def discover(self, options: DiscoverOptions) -> None:
        args = ["eks", "list-clusters", "--output", "table"]
        if options.region:
            args += ["--region", options.region]
        result = self.runner.interactive(AWS, args, env=profile_env(options.profile))
        if not result.ok:
            raise self.exit_failure("Discovery", result)

    def registry_login(self, options: RegistryOptions) -> bool:
        """Pipe a short-lived ECR password into ``docker login``."""
        if not options.region:
            raise ConfigError("--region is required for AWS registry login")
        env = profile_env(options.profile)
        console.print(f"[yellow]  \U0001f433 Fetching ECR login token for region {options.region}...[/yellow]")
        token = self.runner.silent(AWS, ["ecr", "get-login-password", "--region", options.region], env=env)
        if not token.ok:
            raise self.failure("Failed to get ECR token", token)

        identity = self._account(options.profile)
        if not identity.ok:
            raise self.failure("Failed to resolve AWS account ID", identity)

        registry = ECR_REGISTRY_TEMPLATE.format(account=identity.text, region=options.region)
        console.print(f"[yellow]  \U0001f433 Logging Docker into {registry}...[/yellow]")
        login = self.runner.pipe(
            self.docker,
            ["login", "--username", ECR_USERNAME, "--password-stdin", registry],
            token.text,
            env=env,
        )
        if not login.ok:
            raise self.exit_failure("Docker login to ECR", login)
        console.print(f"[green]  ✅ Authenticated to {registry}[/green]")
        return True

    def login(self, profile: Optional[str] = None) -> CommandResult:
        args = ["sso", "login"]
        if profile:
            args += ["--profile", profile]
        return self.runner.interactive(AWS, args)

    def clean(self) -> bool:
        console.print("[dark_orange]  \U0001f7e0 Cleaning AWS sessions...[/dark_orange]")
        result = self.runner.silent(AWS, ["sso", "logout"])
        if result.ok:
            console.print("[green]  ✅ AWS SSO session cleared[/green]")
            return True
        console.print(f"[dim]     aws sso logout: {result.stderr.strip() or 'no active session'}[/dim]")
        return False
