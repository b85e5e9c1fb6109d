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

"""Runtime settings, auto-loaded from CLOUM_* environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloum.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_DOCKER,
    DEFAULT_KUBECTL,
    DEFAULT_RELEASE_MAX_RETRIES,
    DEFAULT_RELEASE_TIMEOUT,
    GITHUB_REPO,
)


def default_config_dir() -> Path:
    """Resolve ``<user-config-dir>/cloum``, honouring ``XDG_CONFIG_HOME``.

    Returns:
        Directory that holds ``clusters.json``.
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / CONFIG_DIR_NAME


class CloumSettings(BaseSettings):
    """cloum settings, auto-loaded from CLOUM_* env vars.

    Attributes:
        config_dir: Directory holding the clusters file.
        github_repo: ``owner/name`` of the repository publishing releases.
        release_timeout: Seconds to wait for the release API.
        release_max_retries: Attempts for the latest-release lookup.
        kubectl: Cluster-access binary used for probes and context cleanup.
        docker: Container-engine binary used for registry logins.
    """

    model_config = SettingsConfigDict(env_prefix="CLOUM_", extra="ignore")

    config_dir: Path = Field(default_factory=default_config_dir)
    github_repo: str = Field(default=GITHUB_REPO, pattern=r"^[\w.-]+/[\w.-]+$")
    release_timeout: int = Field(default=DEFAULT_RELEASE_TIMEOUT, ge=1, le=120)
    release_max_retries: int = Field(default=DEFAULT_RELEASE_MAX_RETRIES, ge=1, le=10)
    kubectl: str = DEFAULT_KUBECTL
    docker: str = DEFAULT_DOCKER

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME
