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

"""Self-update support: version comparison, release lookup, install script."""

from __future__ import annotations

from typing import Literal, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from cloum import logger
from cloum.constants import (
    DEFAULT_RELEASE_MAX_RETRIES,
    DEFAULT_RELEASE_TIMEOUT,
    INSTALL_SCRIPT_TEMPLATE,
    RELEASE_API_TEMPLATE,
    RELEASE_RETRY_WAIT_SECONDS,
)
from cloum.models import CommandResult
from cloum.runner import ProcessRunner

UpdateAction = Literal["latest", "newer", "update"]


def _version_parts(version: str) -> list[int]:
    parts = []
    for piece in version.strip().lstrip("v").split("."):
        parts.append(int(piece) if piece.isdigit() else 0)
    return parts


def compare_versions(a: str, b: str) -> int:
    """Compare two dotted version strings numerically.

    A leading ``v`` is ignored; missing or non-numeric components count as 0,
    so ``"1.2"`` equals ``"1.2.0"``.

    Returns:
        -1 if *a* is older than *b*, 0 if equal, 1 if newer.
    """
    left, right = _version_parts(a), _version_parts(b)
    width = max(len(left), len(right))
    left += [0] * (width - len(left))
    right += [0] * (width - len(right))
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def plan_update(current: str, latest: str, force: bool = False) -> UpdateAction:
    """Decide what ``update`` should do for *current* against *latest*."""
    if force:
        return "update"
    cmp = compare_versions(current, latest)
    if cmp == 0:
        return "latest"
    if cmp > 0:
        return "newer"
    return "update"


def fetch_latest_release(
    repo: str,
    timeout: int = DEFAULT_RELEASE_TIMEOUT,
    max_retries: int = DEFAULT_RELEASE_MAX_RETRIES,
    wait_seconds: float = RELEASE_RETRY_WAIT_SECONDS,
) -> Optional[str]:
    """Look up the latest published release of *repo* on GitHub.

    Args:
        repo: ``owner/name`` of the repository.
        timeout: Per-request timeout in seconds.
        max_retries: Attempts before giving up.
        wait_seconds: Pause between attempts.

    Returns:
        The release version without its ``v`` prefix, or None when the
        lookup failed.
    """
    url = RELEASE_API_TEMPLATE.format(repo=repo)

    @retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_fixed(wait_seconds),
        retry=retry_if_exception_type(requests.RequestException),
        reraise=True,
    )
    def _attempt() -> dict:
        resp = requests.get(url, timeout=timeout, headers={"Accept": "application/vnd.github+json"})
        resp.raise_for_status()
        return resp.json()

    try:
        release = _attempt()
    except (requests.RequestException, ValueError) as err:
        logger.warning("Release lookup for %s failed: %s", repo, err)
        return None

    tag = release.get("tag_name") if isinstance(release, dict) else None
    if not tag:
        logger.warning("Release response for %s has no tag_name", repo)
        return None
    return tag[1:] if tag.startswith("v") else tag


def run_install_script(runner: ProcessRunner, repo: str, uninstall: bool = False) -> CommandResult:
    """Run the published install script, or its uninstall mode."""
    url = INSTALL_SCRIPT_TEMPLATE.format(repo=repo)
    script = f"curl -sL {url} | bash"
    if uninstall:
        script += " -s -- uninstall"
    return runner.interactive("bash", ["-c", script])
