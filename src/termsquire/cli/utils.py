# Copyright 2025 KTTC AI (https://github.com/kttc-ai)
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

"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from termsquire.service import TermService
from termsquire.utils.config import Settings, get_settings


def resolve_settings(ctx: typer.Context) -> Settings:
    """Apply global CLI overrides on top of the environment settings."""
    obj: dict[str, Any] = ctx.obj or {}
    settings = get_settings()
    overrides: dict[str, Any] = {}
    if obj.get("data_dir") is not None:
        overrides["data_dir"] = Path(obj["data_dir"])
    if obj.get("table_name"):
        overrides["table_name"] = obj["table_name"]
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def open_service(ctx: typer.Context) -> TermService:
    """Build an initialized service for the selected data directory.

    Raises:
        ValueError: If the data directory is missing
        StoreError: If the database cannot be prepared
    """
    service = TermService.from_settings(resolve_settings(ctx))
    service.initialize()
    return service
