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

"""Constants shared by the CLI, the adapters and the updater."""

from __future__ import annotations

from typing import Literal

VERSION = "1.3.0"
GITHUB_REPO = "bsreeram08/cloum"

Provider = Literal["gcp", "aws", "azure"]
PROVIDERS: tuple[Provider, ...] = ("gcp", "aws", "azure")

# -- Binaries --
GCLOUD = "gcloud"
AWS = "aws"
AZ = "az"
DEFAULT_KUBECTL = "kubectl"
DEFAULT_DOCKER = "docker"

# -- Config file --
CONFIG_DIR_NAME = "cloum"
CONFIG_FILE_NAME = "clusters.json"

# -- Display labels --
PROVIDER_BANNER = {
    "gcp": "\U0001f535 GCP/GKE",
    "aws": "\U0001f7e0 AWS/EKS",
    "azure": "\U0001f535 Azure/AKS",
}
PROVIDER_LABEL = {
    "gcp": "GCP (GKE)",
    "aws": "AWS (EKS)",
    "azure": "Azure (AKS)",
}
PROVIDER_STATUS_LABEL = {
    "gcp": "\U0001f535 GCP",
    "aws": "\U0001f7e0 AWS",
    "azure": "\U0001f535 Azure",
}

# -- Registries --
GCP_REGISTRY_SUFFIX = "-docker.pkg.dev"
ECR_REGISTRY_TEMPLATE = "{account}.dkr.ecr.{region}.amazonaws.com"
ACR_REGISTRY_SUFFIX = ".azurecr.io"
ECR_USERNAME = "AWS"

# -- Discovery formats --
GCP_CLUSTER_TABLE_FORMAT = "table(name,location,status,currentNodeCount)"
GCP_REPOSITORY_TABLE_FORMAT = "table(name,format,location)"
ACR_LIST_QUERY = "[].{name:name, resourceGroup:resourceGroup, loginServer:loginServer}"

# -- Updates --
RELEASE_API_TEMPLATE = "https://api.github.com/repos/{repo}/releases/latest"
INSTALL_SCRIPT_TEMPLATE = "https://raw.githubusercontent.com/{repo}/main/install.sh"
DEFAULT_RELEASE_TIMEOUT = 10
DEFAULT_RELEASE_MAX_RETRIES = 3
RELEASE_RETRY_WAIT_SECONDS = 2

# -- AI setup prompt --
CLAUDE_NEW_CHAT_URL = "https://claude.ai/new?q={prompt}"
CLAUDE_URL = "https://claude.ai"
