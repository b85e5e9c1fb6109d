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

"""Exception hierarchy and provider CLI error classification.

Classification is table driven: each provider owns an ordered tuple of
:class:`ErrorSignature` entries and the first entry whose predicate matches
the lower-cased stderr wins. New signatures are appended to the tables.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Exceptions
# ============================================================================

class CloumError(RuntimeError):
    """Base class for every error reported to the user."""


class ConfigError(CloumError):
    """Invalid flags, config file contents or import files."""


class ClusterNotFoundError(ConfigError):
    """Raised when no cluster record carries the requested name."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        names = ", ".join(available) or "(none configured)"
        super().__init__(f'Cluster "{name}" not found. Available: {names}')
        self.name = name
        self.available = list(available)


class DuplicateClusterError(ConfigError):
    """Raised when adding a record whose name is already stored."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'Cluster "{name}" already exists. Remove it first or choose a different name.'
        )
        self.name = name


class CommandNotFoundError(CloumError):
    """Raised when an external executable is not on PATH."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Required command '{command}' not found. Please install it first.")
        self.command = command


class ProviderError(CloumError):
    """A fatal step of a provider workflow failed."""

    def __init__(self, provider: str, message: str, classified: Optional[ClassifiedError] = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.classified = classified

    @property
    def hint(self) -> Optional[str]:
        return self.classified.hint if self.classified else None


# ============================================================================
# Classifier
# ============================================================================

@dataclass(frozen=True)
class ClassifiedError:
    """Short message and remediation hint derived from CLI stderr."""

    message: str
    hint: Optional[str] = None
    retryable: bool = False


@dataclass(frozen=True)
class ErrorSignature:
    """One known failure pattern of a provider CLI."""

    matches: Callable[[str], bool]
    message: str
    hint: Optional[str] = None
    retryable: bool = False


def _any(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(n in text for n in needles)


def _both(first: Callable[[str], bool], second: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: first(text) and second(text)


GCP_SIGNATURES: tuple[ErrorSignature, ...] = (
    ErrorSignature(
        _any(
            "reauthentication failed",
            "there was a problem refreshing your current auth tokens",
            "invalid credentials",
            "token expired",
        ),
        "GCP authentication failed or expired",
        "Run: gcloud auth login\n"
        "Or for service account: gcloud auth activate-service-account --key-file=KEY_FILE",
        retryable=True,
    ),
    ErrorSignature(
        _any("permission denied", "insufficient permissions"),
        "Insufficient GCP permissions",
        "Your account lacks required permissions. Ask your admin to add appropriate roles "
        "(e.g., 'roles/container.clusterViewer' for read, 'roles/container.clusterAdmin' for full access).",
    ),
    ErrorSignature(
        _both(_any("not found"), _any("project", "cluster")),
        "Project or cluster not found",
        "Verify the project ID and cluster name are correct. Run: gcloud projects list",
    ),
    ErrorSignature(
        _both(_any("not found"), _any("region", "zone")),
        "Region or zone not found",
        "Verify the region/zone exists. Run: gcloud compute regions list",
    ),
)

AWS_SIGNATURES: tuple[ErrorSignature, ...] = (
    ErrorSignature(
        _any(
            "the sso session associated with this profile has expired",
            "sso session has expired",
            "error validating provider",
        ),
        "AWS SSO session expired",
        "Run: aws sso login --profile PROFILE_NAME",
        retryable=True,
    ),
    ErrorSignature(
        _both(_any("profile"), _any("does not exist")),
        "AWS profile not found",
        "Check your AWS config: ~/.aws/config",
    ),
    ErrorSignature(
        _any("access denied", "unauthorized"),
        "AWS access denied",
        "Verify your IAM permissions include eks:DescribeCluster and eks:AccessKubernetesApi",
    ),
    ErrorSignature(
        _both(_any("not found"), _any("cluster")),
        "EKS cluster not found",
        "Verify cluster name and region. Run: aws eks list-clusters --region REGION",
    ),
)

AZURE_SIGNATURES: tuple[ErrorSignature, ...] = (
    ErrorSignature(
        _both(_any("please run"), _any("az login")),
        "Azure not authenticated",
        "Run: az login",
        retryable=True,
    ),
    ErrorSignature(
        _both(_any("subscription"), _any("not found", "not exist")),
        "Azure subscription not found",
        "Verify your subscription. Run: az account list",
    ),
    ErrorSignature(
        _any("permission denied", "authorization failed"),
        "Azure permission denied",
        "Your account lacks required Azure RBAC permissions. "
        "Ask admin to add 'Azure Kubernetes Service Cluster User Role'.",
    ),
    ErrorSignature(
        _both(_any("not found"), _any("cluster")),
        "AKS cluster not found",
        "Verify cluster name and resource group. Run: az aks list",
    ),
)

SIGNATURES: dict[str, tuple[ErrorSignature, ...]] = {
    "gcp": GCP_SIGNATURES,
    "aws": AWS_SIGNATURES,
    "azure": AZURE_SIGNATURES,
}


def first_line(text: str) -> str:
    """Return the first non-empty line of *text*, or ``"Unknown error"``."""
    for line in text.strip().splitlines():
        if line.strip():
            return line.strip()
    return "Unknown error"


def classify(provider: str, stderr: str) -> ClassifiedError:
    """Match provider CLI stderr against the known failure signatures.

    Args:
        provider: Provider tag (``gcp``, ``aws`` or ``azure``).
        stderr: Raw standard-error text of the failed command.

    Returns:
        The first matching signature's message and hint, or the first line
        of *stderr* with no hint when nothing matches.

    Raises:
        KeyError: If *provider* is not a known provider tag.
    """
    lower = stderr.lower()
    for signature in SIGNATURES[provider]:
        if signature.matches(lower):
            return ClassifiedError(signature.message, signature.hint, signature.retryable)
    return ClassifiedError(first_line(stderr))
