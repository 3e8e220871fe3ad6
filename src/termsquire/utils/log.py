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

"""Logging setup for termsquire."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

logger = logging.getLogger(__name__)

_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def parse_log_level(level: str) -> int:
    """Map a level name to a logging level, defaulting to INFO."""
    parsed = _LEVELS.get(level.strip().lower())
    if parsed is None:
        logger.warning(f"Unrecognized log level {level!r}, defaulting to INFO.")
        return logging.INFO
    return parsed


def setup_logging(level: str = "INFO") -> int:
    """Configure the root logger with a rich console handler.

    Returns:
        The numeric level applied
    """
    log_level = parse_log_level(level)
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    logger.debug(f"Logging configured at {logging.getLevelName(log_level)}")
    return log_level
