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

"""Command modules and the per-invocation context they share."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cloum.providers import ProviderAdapter, get_adapter
from cloum.runner import ProcessRunner
from cloum.settings import CloumSettings
from cloum.store import ClusterStore


@dataclass
class AppContext:
    """Settings, store and runner resolved once per invocation."""

    settings: CloumSettings
    store: ClusterStore
    runner: ProcessRunner

    @classmethod
    def from_settings(cls, settings: Optional[CloumSettings] = None) -> AppContext:
        settings = settings or CloumSettings()
        return cls(settings, ClusterStore(settings.config_path), ProcessRunner())

    def adapter(self, provider: str) -> ProviderAdapter:
        return get_adapter(
            provider, self.runner, kubectl=self.settings.kubectl, docker=self.settings.docker,
        )


def get_context(ctx: typer.Context) -> AppContext:
    """Return the invocation's AppContext, building it from the environment if unset."""
    app_ctx = ctx.find_object(AppContext)
    if app_ctx is None:
        app_ctx = AppContext.from_settings()
        ctx.find_root().obj = app_ctx
    return app_ctx
