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

"""Provider adapters and their lookup by provider tag."""

from __future__ import annotations

from cloum.constants import DEFAULT_DOCKER, DEFAULT_KUBECTL, PROVIDERS
from cloum.errors import ConfigError
from cloum.providers.aws import AwsAdapter
from cloum.providers.azure import AzureAdapter
from cloum.providers.base import ProviderAdapter, count_lines, current_context, probe_nodes
from cloum.providers.gcp import GcpAdapter
from cloum.runner import ProcessRunner

ADAPTERS: dict[str, type[ProviderAdapter]] = {
    "gcp": GcpAdapter,
    "aws": AwsAdapter,
    "azure": AzureAdapter,
}


def get_adapter(
    provider: str,
    runner: ProcessRunner,
    kubectl: str = DEFAULT_KUBECTL,
    docker: str = DEFAULT_DOCKER,
) -> ProviderAdapter:
    """Instantiate the adapter for *provider*.

    Raises:
        ConfigError: If *provider* is not one of gcp, aws, azure.
    """
    try:
        adapter_cls = ADAPTERS[provider]
    except KeyError:
        raise ConfigError(
            f'Invalid provider "{provider}". Must be one of: {", ".join(PROVIDERS)}'
        ) from None
    return adapter_cls(runner, kubectl=kubectl, docker=docker)


__all__ = [
    "ADAPTERS",
    "AwsAdapter",
    "AzureAdapter",
    "GcpAdapter",
    "ProviderAdapter",
    "count_lines",
    "current_context",
    "get_adapter",
    "probe_nodes",
]
