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

"""
termsquire - terminology dictionary store

Imports terminology exchange files into SQLite, links the language
variants of each concept under a shared term set id, and serves
reads from a coherent in-process cache.
"""

__version__ = "0.3.0"

from termsquire.core.errors import (
    CacheRefreshError,
    GroupingError,
    ParseError,
    StoreError,
    TermNotFoundError,
    TermSquireError,
)
from termsquire.core.models import (
    Dictionary,
    DictionaryEntry,
    ImportReport,
    StoredTerm,
    TermLanguageSet,
)
from termsquire.memory import TermCache, TermStore
from termsquire.service import TermService

__all__ = [
    "CacheRefreshError",
    "Dictionary",
    "DictionaryEntry",
    "GroupingError",
    "ImportReport",
    "ParseError",
    "StoreError",
    "StoredTerm",
    "TermCache",
    "TermLanguageSet",
    "TermNotFoundError",
    "TermService",
    "TermSquireError",
    "TermStore",
    "__version__",
]
