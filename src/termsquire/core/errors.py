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

"""Exceptions raised by the import, storage and cache layers."""

from __future__ import annotations


class TermSquireError(Exception):
    """Base exception for termbase errors.

    Args:
        message: Human-readable reason
        entry_id: Id of the dictionary entry being processed, if known
    """

    def __init__(self, message: str, entry_id: int | None = None):
        super().__init__(message)
        self.message = message
        self.entry_id = entry_id

    def __str__(self) -> str:
        if self.entry_id is not None:
            return f"entry {self.entry_id}: {self.message}"
        return self.message


class ParseError(TermSquireError):
    """Raised when a dictionary file is malformed or missing required structure."""

    pass


class GroupingError(TermSquireError):
    """Raised when a multi-variant entry has no variant carrying a term."""

    pass


class StoreError(TermSquireError):
    """Raised when the SQLite store rejects or fails an operation."""

    pass


class TermNotFoundError(StoreError):
    """Raised when a delete or update touches zero rows."""

    pass


class CacheRefreshError(TermSquireError):
    """Raised when the term cache cannot be reloaded from the store.

    Never fails the mutation that triggered the refresh.
    """

    pass
