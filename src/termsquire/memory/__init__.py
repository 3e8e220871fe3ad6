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

"""Term storage and caching.

Provides:
- SQLite term store with term set id allocation
- Distinct-value tables for filter lists
- In-process snapshot and query cache
"""

from .cache import WILDCARD_KEY, ReadWriteLock, TermCache, search_key
from .termbase import TermStore
from .unique_values import UNIQUE_VALUE_TABLES, UniqueValueIndex

__all__ = [
    "ReadWriteLock",
    "TermCache",
    "TermStore",
    "UNIQUE_VALUE_TABLES",
    "UniqueValueIndex",
    "WILDCARD_KEY",
    "search_key",
]
