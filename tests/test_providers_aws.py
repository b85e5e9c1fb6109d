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

"""Tests for the AWS adapter."""

from __future__ import annotations

import pytest

from cloum.errors import ConfigError, ProviderError
from cloum.models import AwsCluster, DiscoverOptions, RegistryOptions
from cloum.providers import AwsAdapter

ACCOUNT_QUERY = ("aws", "sts", "get-caller-identity", "--query", "Account")


@pytest.fixture
def adapter(fake_runner):
    return AwsAdapter(fake_runner)


@pytest.fixture
def cluster():
    return AwsCluster(
        name="staging-eks", region="us-east-1", cluster_name="staging",
        profile="staging", role_arn="arn:aws:iam::123456789012:role/eks-admin",
    )


def test_connect_passes_profile_through_env(adapter, cluster, fake_runner):
    fake_runner.on(*ACCOUNT_QUERY, stdout="123456789012\n")
    fake_runner.on("kubectl", "get", "nodes", stdout="ip-10-0-0-1\n")

    adapter.connect(cluster)

    update = fake_runner.find("aws", "eks", "update-kubeconfig")
    assert update.mode == "interactive"
    assert update.argv == (
        "aws", "eks", "update-kubeconfig",
        "--name", "staging", "--region", "us-east-1",
        "--role-arn", "arn:aws:iam::123456789012:role/eks-admin",
    )
    assert update.env == {"AWS_PROFILE": "staging"}
    assert all(c.env == {"AWS_PROFILE": "staging"} for c in fake_runner.calls if c.argv[0] == "aws")
    assert not fake_runner.called("aws", "sso", "login")


def test_connect_without_profile_skips_identity_check(adapter, fake_runner):
    cluster = AwsCluster(name="eks", region="eu-west-1", cluster_name="c1")

    adapter.connect(cluster)

    first_aws = [c for c in fake_runner.calls if c.argv[0] == "aws"][0]
    assert first_aws.argv[:3] == ("aws", "eks", "update-kubeconfig")
    assert "--role-arn" not in first_aws.argv
    assert first_aws.env == {}


def test_connect_expired_sso_launches_login(adapter, cluster, fake_runner):
    fake_runner.on(*ACCOUNT_QUERY, exit_code=255, stderr="The SSO session associated with this profile has expired")
    fake_runner.on(*ACCOUNT_QUERY, stdout="123456789012\n")

    adapter.connect(cluster)

    login = fake_runner.find("aws", "sso", "login")
    assert login.argv == ("aws", "sso", "login", "--profile", "staging")
    assert login.mode == "interactive"
    argvs = fake_runner.argvs()
    assert argvs.index(login.argv) < argvs.index(fake_runner.find("aws", "eks", "update-kubeconfig").argv)


def test_connect_failed_sso_login_is_fatal(adapter, cluster, fake_runner):
    fake_runner.on(*ACCOUNT_QUERY, exit_code=255)
    fake_runner.on("aws", "sso", "login", exit_code=1)

    with pytest.raises(ProviderError) as excinfo:
        adapter.connect(cluster)

    assert "aws sso login --profile staging" in excinfo.value.hint
    assert not fake_runner.called("aws", "eks")


def test_connect_update_kubeconfig_failure(adapter, cluster, fake_runner):
    fake_runner.on("aws", "eks", "update-kubeconfig", exit_code=254)

    with pytest.raises(ProviderError, match=r"exit 254"):
        adapter.connect(cluster)


def test_status_reports_arn_and_profile(adapter, fake_runner, monkeypatch):
    monkeypatch.setenv("AWS_PROFILE", "prod")
    fake_runner.on("aws", "sts", "get-caller-identity", "--query", "Arn",
                   stdout="arn:aws:sts::123:assumed-role/admin/me\n")

    status = adapter.status()

    assert status.authenticated
    assert status.identity == "arn:aws:sts::123:assumed-role/admin/me"
    assert status.details == "profile: prod"


def test_status_unauthenticated(adapter, fake_runner):
    fake_runner.on("aws", "sts", "get-caller-identity", exit_code=255, stderr="Unable to locate credentials")
    assert adapter.status().authenticated is False


def test_discover_uses_region_and_profile(adapter, fake_runner):
    adapter.discover(DiscoverOptions(region="us-west-2", profile="dev"))

    call = fake_runner.find("aws", "eks", "list-clusters")
    assert call.argv == ("aws", "eks", "list-clusters", "--output", "table", "--region", "us-west-2")
    assert call.env == {"AWS_PROFILE": "dev"}


def test_registry_login_pipes_token_into_docker(adapter, fake_runner):
    fake_runner.on("aws", "ecr", "get-login-password", stdout="s3cr3t-token\n")
    fake_runner.on(*ACCOUNT_QUERY, stdout="123456789012\n")

    assert adapter.registry_login(RegistryOptions(region="us-east-1", profile="prod"))

    docker = fake_runner.find("docker", "login")
    assert docker.mode == "pipe"
    assert docker.input_text == "s3cr3t-token"
    assert docker.argv == (
        "docker", "login", "--username", "AWS", "--password-stdin",
        "123456789012.dkr.ecr.us-east-1.amazonaws.com",
    )
    assert fake_runner.find("aws", "ecr").env == {"AWS_PROFILE": "prod"}


def test_registry_login_uses_configured_container_engine(fake_runner):
    adapter = AwsAdapter(fake_runner, docker="podman")
    adapter.registry_login(RegistryOptions(region="us-east-1"))
    assert fake_runner.called("podman", "login")


def test_registry_login_token_failure_is_classified(adapter, fake_runner):
    fake_runner.on("aws", "ecr", "get-login-password", exit_code=255,
                   stderr="Error when retrieving token from sso: the sso session has expired")

    with pytest.raises(ProviderError, match="AWS SSO session expired") as excinfo:
        adapter.registry_login(RegistryOptions(region="us-east-1"))

    assert "aws sso login" in excinfo.value.hint
    assert not fake_runner.called("docker")


def test_registry_login_requires_region(adapter):
    with pytest.raises(ConfigError, match="--region"):
        adapter.registry_login(RegistryOptions())


def test_clean_logs_out_of_sso(adapter, fake_runner):
    assert adapter.clean()
    assert fake_runner.called("aws", "sso", "logout")


def test_clean_without_session(adapter, fake_runner):
    fake_runner.on("aws", "sso", "logout", exit_code=255)
    assert adapter.clean() is False
