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

"""Core models and errors for termsquire."""

from termsquire.core.errors import (
    CacheRefreshError,
    GroupingError,
    ParseError,
    StoreError,
    TermNotFoundError,
    TermSquireError,
)
from termsquire.core.models import (
    VARIANT_FIELDS,
    Dictionary,
    DictionaryEntry,
    ImportReport,
    StoredTerm,
    TermLanguageSet,
)

__all__ = [
    "VARIANT_FIELDS",
    "CacheRefreshError",
    "Dictionary",
    "DictionaryEntry",
    "GroupingError",
    "ImportReport",
    "ParseError",
    "StoreError",
    "StoredTerm",
    "TermLanguageSet",
    "TermNotFoundError",
    "TermSquireError",
]
