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

"""Cluster records and the ephemeral results passed between layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

NonEmpty = Annotated[str, Field(min_length=1)]


# ============================================================================
# Cluster records
# ============================================================================

class _ClusterBase(BaseModel):
    """Fields shared by every provider variant.

    Attributes:
        name: Unique alias of the cluster within the store.
        provider: Variant tag, narrowed to a literal by each subclass.
        region: Cloud region or location.
        cluster_name: Cloud-side cluster identifier (``clusterName`` on disk).
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    name: NonEmpty
    provider: str
    region: NonEmpty
    cluster_name: NonEmpty = Field(alias="clusterName")

    def to_json(self) -> dict:
        """Serialize with on-disk field names, omitting unset optionals.

        Keys the model does not know (added to the file by hand) are kept.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


class GcpCluster(_ClusterBase):
    """GKE cluster.

    Attributes:
        project: GCP project ID.
        account: gcloud account to activate before connecting, or None.
    """

    provider: Literal["gcp"] = "gcp"
    project: NonEmpty
    account: Optional[str] = None


class AwsCluster(_ClusterBase):
    """EKS cluster.

    Attributes:
        profile: Named AWS profile exported as ``AWS_PROFILE``, or None.
        role_arn: IAM role to assume in the kubeconfig entry, or None.
    """

    provider: Literal["aws"] = "aws"
    profile: Optional[str] = None
    role_arn: Optional[str] = Field(default=None, alias="roleArn")


class AzureCluster(_ClusterBase):
    """AKS cluster.

    Attributes:
        resource_group: Azure resource group holding the cluster.
        subscription: Subscription name or ID to activate, or None.
    """

    provider: Literal["azure"] = "azure"
    resource_group: NonEmpty = Field(alias="resourceGroup")
    subscription: Optional[str] = None


ClusterRecord = Annotated[
    Union[GcpCluster, AwsCluster, AzureCluster],
    Field(discriminator="provider"),
]

cluster_adapter: TypeAdapter[ClusterRecord] = TypeAdapter(ClusterRecord)


def parse_cluster(data: dict) -> ClusterRecord:
    """Validate a raw mapping into the matching provider variant.

    Raises:
        pydantic.ValidationError: If the mapping is not a valid record.
    """
    return cluster_adapter.validate_python(data)


# ============================================================================
# Ephemeral results
# ============================================================================

@dataclass(frozen=True)
class CommandResult:
    """Outcome of one subprocess run. Output is empty for interactive runs."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def text(self) -> str:
        return self.stdout.strip()


@dataclass(frozen=True)
class ProviderStatus:
    """Result of a provider authentication probe."""

    provider: str
    authenticated: bool
    identity: Optional[str] = None
    details: Optional[str] = None


@dataclass(frozen=True)
class RegistryOptions:
    """Inputs for container-registry logins.

    Attributes:
        region: Cloud region (GCP, AWS).
        project: GCP project.
        profile: AWS profile.
        registry: Azure Container Registry name.
    """

    region: Optional[str] = None
    project: Optional[str] = None
    profile: Optional[str] = None
    registry: Optional[str] = None


@dataclass(frozen=True)
class DiscoverOptions:
    """Filters for provider-native cluster listings."""

    project: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    resource_group: Optional[str] = None


@dataclass
class ImportSummary:
    """Names added and skipped by a merge into the store."""

    added: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
