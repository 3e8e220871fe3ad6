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

"""Timestamp helpers for dictionary dates.

Dictionary files carry dates in the compact ``YYYYMMDDTHHMMSSZ`` form.
The store keeps them as integer Unix epoch seconds (UTC).
"""

from __future__ import annotations

from datetime import datetime, timezone

COMPACT_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def current_epoch() -> int:
    """Return the current time as Unix epoch seconds."""
    return int(datetime.now(timezone.utc).timestamp())


def parse_timestamp_string(date_str: str) -> datetime:
    """Parse a compact dictionary timestamp.

    Args:
        date_str: Timestamp such as ``20240131T154500Z``

    Returns:
        Naive datetime (UTC wall time)

    Raises:
        ValueError: If the string does not match the compact format
    """
    return datetime.strptime(date_str.strip(), COMPACT_TIMESTAMP_FORMAT)


def parse_timestamp(date_str: str | None) -> int | None:
    """Convert a compact timestamp to epoch seconds.

    Unparseable or missing values yield None rather than an error.
    """
    if not date_str:
        return None
    try:
        parsed = parse_timestamp_string(date_str)
    except ValueError:
        return None
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def format_timestamp(timestamp: int | None) -> str:
    """Render epoch seconds as ``YYYY-MM-DD HH:MM:SS`` (UTC).

    Returns an empty string for None and "Invalid Date" for out-of-range values.
    """
    if timestamp is None:
        return ""
    try:
        dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return "Invalid Date"
    return dt.strftime(DISPLAY_TIMESTAMP_FORMAT)


def timestamp_for_human_readable(date_str: str) -> str:
    """Reformat a compact timestamp for display, or "error" if it is invalid."""
    try:
        return str(parse_timestamp_string(date_str))
    except ValueError:
        return "error"
