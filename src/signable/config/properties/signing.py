# Copyright 2026 Firefly Software Solutions Inc.
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
"""Signing behavior configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from signable.core.config import config_properties

DEFAULT_COLUMNS: dict[str, str] = {
    "created": "created_by",
    "updated": "updated_by",
    "deleted": "deleted_by",
}

DEFAULT_USER_METHODS: dict[str, str] = {
    "id": "id",
    "string": "__str__",
}


@config_properties(prefix="signable")
@dataclass
class SignableProperties:
    """Configuration for the signing behavior (signable.*)."""

    enabled: bool = True
    columns: dict = field(default_factory=lambda: dict(DEFAULT_COLUMNS))
    user_methods: dict = field(default_factory=lambda: dict(DEFAULT_USER_METHODS))
