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

"""Tests for the GCP adapter."""

from __future__ import annotations

import pytest

from cloum.errors import CommandNotFoundError, ConfigError, ProviderError
from cloum.models import DiscoverOptions, GcpCluster, RegistryOptions
from cloum.providers import GcpAdapter


@pytest.fixture
def adapter(fake_runner):
    return GcpAdapter(fake_runner)


@pytest.fixture
def cluster():
    return GcpCluster(name="prod-gke", region="us-central1", cluster_name="prod", project="my-project")


def _healthy(fake_runner, project="my-project"):
    fake_runner.on("gcloud", "config", "get-value", "project", stdout=f"{project}\n")
    fake_runner.on("gcloud", "config", "get-value", "account", stdout="me@example.com\n")
    fake_runner.on("kubectl", "get", "nodes", stdout="node-1 Ready\nnode-2 Ready\n")
    fake_runner.on("kubectl", "config", "current-context", stdout="gke_my-project_us-central1_prod\n")


def test_connect_happy_path(adapter, cluster, fake_runner, capsys):
    _healthy(fake_runner)

    adapter.connect(cluster)

    assert fake_runner.required == ["gcloud", "kubectl"]
    argvs = fake_runner.argvs()
    set_project = argvs.index(("gcloud", "config", "set", "project", "my-project"))
    get_creds = argvs.index((
        "gcloud", "container", "clusters", "get-credentials", "prod",
        "--region", "us-central1", "--project", "my-project",
    ))
    assert set_project < get_creds
    assert fake_runner.find("gcloud", "container", "clusters", "get-credentials").mode == "interactive"
    err = capsys.readouterr().err
    assert "Authentication properly aligned" in err
    assert "2 node(s) available" in err
    assert "gke_my-project_us-central1_prod" in err


def test_connect_launches_login_when_token_invalid(adapter, fake_runner):
    cluster = GcpCluster(name="prod", region="r", cluster_name="c", project="my-project", account="ops@example.com")
    _healthy(fake_runner)
    fake_runner.on("gcloud", "auth", "print-access-token", exit_code=1, stderr="token expired")

    adapter.connect(cluster)

    login = fake_runner.find("gcloud", "auth", "login")
    assert login.mode == "interactive"
    assert login.argv == ("gcloud", "auth", "login", "--account", "ops@example.com")
    assert fake_runner.called("gcloud", "container", "clusters", "get-credentials")


def test_connect_switches_account_and_revalidates(adapter, fake_runner):
    cluster = GcpCluster(name="prod", region="r", cluster_name="c", project="my-project", account="ops@example.com")
    _healthy(fake_runner)
    fake_runner.on("gcloud", "auth", "print-access-token")
    fake_runner.on("gcloud", "auth", "print-access-token", exit_code=1)

    adapter.connect(cluster)

    argvs = fake_runner.argvs()
    switch = argvs.index(("gcloud", "config", "set", "account", "ops@example.com"))
    login = argvs.index(("gcloud", "auth", "login", "--account", "ops@example.com"))
    assert switch < login


def test_connect_failed_login_is_fatal(adapter, cluster, fake_runner):
    fake_runner.on("gcloud", "auth", "print-access-token", exit_code=1)
    fake_runner.on("gcloud", "auth", "login", exit_code=1)

    with pytest.raises(ProviderError) as excinfo:
        adapter.connect(cluster)

    assert excinfo.value.hint == "Run: gcloud auth login"
    assert not fake_runner.called("gcloud", "container")


def test_connect_set_project_failure_is_classified(adapter, cluster, fake_runner):
    fake_runner.on(
        "gcloud", "config", "set", "project", exit_code=1,
        stderr="ERROR: (gcloud.config.set) PERMISSION_DENIED: Permission denied on project",
    )

    with pytest.raises(ProviderError, match="Insufficient GCP permissions") as excinfo:
        adapter.connect(cluster)

    assert excinfo.value.provider == "gcp"
    assert "roles/container" in excinfo.value.hint
    assert not fake_runner.called("gcloud", "container", "clusters", "get-credentials")


def test_connect_credentials_failure_reports_exit_code(adapter, cluster, fake_runner):
    fake_runner.on("gcloud", "container", "clusters", "get-credentials", exit_code=2)

    with pytest.raises(ProviderError, match=r"get-credentials failed \(exit 2\)"):
        adapter.connect(cluster)


def test_connect_mismatch_only_warns(adapter, cluster, fake_runner, capsys):
    fake_runner.on("gcloud", "config", "get-value", "project", stdout="someone-elses-project\n")
    fake_runner.on("kubectl", "get", "nodes", exit_code=1, stderr="connection refused")

    adapter.connect(cluster)

    err = capsys.readouterr().err
    assert "may not be fully aligned" in err
    assert "not immediately reachable" in err


def test_connect_requires_cli(adapter, cluster, fake_runner):
    fake_runner.missing.add("gcloud")
    with pytest.raises(CommandNotFoundError, match="gcloud"):
        adapter.connect(cluster)
    assert fake_runner.calls == []


def test_status_authenticated(adapter, fake_runner):
    fake_runner.on("gcloud", "auth", "list", stdout="me@example.com\n")
    fake_runner.on("gcloud", "config", "get-value", "project", stdout="my-project\n")

    status = adapter.status()

    assert status.authenticated
    assert status.identity == "me@example.com"
    assert status.details == "project: my-project"


def test_status_unauthenticated_never_raises(adapter, fake_runner):
    fake_runner.on("gcloud", "auth", "list", exit_code=1)

    status = adapter.status()

    assert status.authenticated is False
    assert status.identity is None


def test_status_missing_cli(adapter, fake_runner):
    fake_runner.missing.add("gcloud")

    status = adapter.status()

    assert not status.authenticated
    assert status.details == "gcloud not installed"


def test_discover_passes_project(adapter, fake_runner):
    adapter.discover(DiscoverOptions(project="my-project"))
    call = fake_runner.find("gcloud", "container", "clusters", "list")
    assert call.mode == "interactive"
    assert call.argv[-2:] == ("--project", "my-project")


def test_discover_failure_raises(adapter, fake_runner):
    fake_runner.on("gcloud", "container", "clusters", "list", exit_code=1)
    with pytest.raises(ProviderError):
        adapter.discover(DiscoverOptions())


def test_registry_login_configures_docker(adapter, fake_runner):
    assert adapter.registry_login(RegistryOptions(region="europe-west1", project="p"))
    assert fake_runner.called("gcloud", "auth", "configure-docker", "europe-west1-docker.pkg.dev", "--quiet")


def test_registry_login_requires_region_and_project(adapter):
    with pytest.raises(ConfigError):
        adapter.registry_login(RegistryOptions(project="p"))


def test_list_registries_uses_active_project(adapter, fake_runner):
    fake_runner.on("gcloud", "config", "get-value", "project", stdout="active-proj\n")
    adapter.list_registries(RegistryOptions())
    call = fake_runner.find("gcloud", "artifacts", "repositories", "list")
    assert ("--project", "active-proj") == call.argv[4:6]


def test_clean_revokes_each_active_account(adapter, fake_runner):
    fake_runner.on("gcloud", "auth", "list", stdout="a@example.com\nb@example.com\n")

    assert adapter.clean()

    assert fake_runner.called("gcloud", "auth", "revoke", "a@example.com", "--quiet")
    assert fake_runner.called("gcloud", "auth", "revoke", "b@example.com", "--quiet")


def test_clean_without_accounts(adapter, fake_runner):
    assert adapter.clean() is False
    assert not fake_runner.called("gcloud", "auth", "revoke")
