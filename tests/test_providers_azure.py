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

"""Tests for the Azure adapter."""

from __future__ import annotations

import pytest

from cloum.errors import ProviderError
from cloum.models import AzureCluster, DiscoverOptions, RegistryOptions
from cloum.providers import AzureAdapter

NAME_QUERY = ("az", "account", "show", "--query", "name")


@pytest.fixture
def adapter(fake_runner):
    return AzureAdapter(fake_runner)


@pytest.fixture
def cluster():
    return AzureCluster(
        name="dev-aks", region="eastus", cluster_name="dev", resource_group="dev-rg", subscription="Dev Sub",
    )


def test_connect_happy_path(adapter, cluster, fake_runner, capsys):
    fake_runner.on(*NAME_QUERY, stdout="Dev Sub\n")
    fake_runner.on("az", "account", "show", "--query", "tenantId", stdout="tenant-123\n")
    fake_runner.on("az", "aks", "show", stdout="dev\n")

    adapter.connect(cluster)

    argvs = fake_runner.argvs()
    set_sub = argvs.index(("az", "account", "set", "--subscription", "Dev Sub"))
    creds = fake_runner.find("az", "aks", "get-credentials")
    assert creds.argv == (
        "az", "aks", "get-credentials", "--resource-group", "dev-rg", "--name", "dev", "--overwrite-existing",
    )
    assert creds.mode == "interactive"
    assert set_sub < argvs.index(creds.argv)
    err = capsys.readouterr().err
    assert "Authentication properly aligned" in err
    assert "tenant-123" in err


def test_connect_subscription_id_counts_as_aligned(adapter, fake_runner, capsys):
    cluster = AzureCluster(name="a", region="r", cluster_name="c", resource_group="rg", subscription="0000-1111")
    fake_runner.on(*NAME_QUERY, stdout="Dev Sub\n")
    fake_runner.on("az", "account", "show", "--query", "id", stdout="0000-1111\n")

    adapter.connect(cluster)

    assert "Authentication properly aligned" in capsys.readouterr().err


def test_connect_missing_cluster_fails_fast(adapter, cluster, fake_runner):
    fake_runner.on("az", "aks", "show", exit_code=3, stderr="(ResourceNotFound) The Resource was not found")

    with pytest.raises(ProviderError, match='AKS cluster "dev" not found in resource group "dev-rg"') as excinfo:
        adapter.connect(cluster)

    assert excinfo.value.hint == 'Run: az aks list --resource-group dev-rg --query "[].name" --output tsv'
    assert not fake_runner.called("az", "aks", "get-credentials")


def test_connect_not_logged_in_launches_login(adapter, cluster, fake_runner):
    fake_runner.on(*NAME_QUERY, exit_code=1, stderr="Please run 'az login' to setup account.")
    fake_runner.on(*NAME_QUERY, stdout="Dev Sub\n")

    adapter.connect(cluster)

    login = fake_runner.find("az", "login")
    assert login.argv == ("az", "login")
    assert login.mode == "interactive"


def test_connect_failed_login_is_fatal(adapter, cluster, fake_runner):
    fake_runner.on(*NAME_QUERY, exit_code=1)
    fake_runner.on("az", "login", exit_code=1)

    with pytest.raises(ProviderError) as excinfo:
        adapter.connect(cluster)

    assert excinfo.value.hint == "Run: az login"
    assert not fake_runner.called("az", "aks")


def test_connect_subscription_failure_is_classified(adapter, cluster, fake_runner):
    fake_runner.on("az", "account", "set", exit_code=1,
                   stderr="ERROR: The subscription of 'Dev Sub' doesn't exist in cloud 'AzureCloud'. Not found.")

    with pytest.raises(ProviderError, match="Azure subscription not found"):
        adapter.connect(cluster)


def test_connect_wrong_subscription_only_warns(adapter, cluster, fake_runner, capsys):
    fake_runner.on(*NAME_QUERY, stdout="Other Sub\n")

    adapter.connect(cluster)

    assert "may not be fully aligned" in capsys.readouterr().err


def test_status(adapter, fake_runner):
    fake_runner.on("az", "account", "show", "--query", "user.name", stdout="me@corp.com\n")
    fake_runner.on(*NAME_QUERY, stdout="Dev Sub\n")

    status = adapter.status()

    assert status.authenticated
    assert status.identity == "me@corp.com"
    assert status.details == "subscription: Dev Sub"


def test_status_unauthenticated(adapter, fake_runner):
    fake_runner.on("az", "account", "show", exit_code=1)
    assert adapter.status().authenticated is False


def test_status_missing_cli(adapter, fake_runner):
    fake_runner.missing.add("az")
    assert adapter.status().details == "az not installed"


def test_discover_filters_resource_group(adapter, fake_runner):
    adapter.discover(DiscoverOptions(resource_group="dev-rg"))
    assert fake_runner.called("az", "aks", "list", "--output", "table", "--resource-group", "dev-rg")


def test_registry_without_name_lists_registries(adapter, fake_runner, capsys):
    assert adapter.registry_login(RegistryOptions()) is False
    assert fake_runner.called("az", "acr", "list")
    assert not fake_runner.called("az", "acr", "login")
    assert "Use --registry <name>" in capsys.readouterr().err


def test_registry_login_named(adapter, fake_runner):
    assert adapter.registry_login(RegistryOptions(registry="myacr"))
    assert fake_runner.find("az", "acr", "login").argv == ("az", "acr", "login", "--name", "myacr")


def test_registry_login_failure_raises(adapter, fake_runner):
    fake_runner.on("az", "acr", "login", exit_code=1)
    with pytest.raises(ProviderError, match="ACR login failed"):
        adapter.registry_login(RegistryOptions(registry="myacr"))


def test_clean_logs_out(adapter, fake_runner):
    assert adapter.clean()
    assert fake_runner.called("az", "logout")
