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
"""Security context identifying the user behind the current request."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SecurityContext:
    """Holds the authenticated principal for the current request.

    Satisfies the default user-method mapping of the signing behavior:
    ``id`` yields the user identifier and ``str()`` the display name.
    """

    user_id: int | str | None = None
    username: str | None = None
    roles: list[str] = field(default_factory=list)

    @property
    def id(self) -> int | str | None:
        return self.user_id

    @property
    def is_authenticated(self) -> bool:
        """Whether the current user is authenticated."""
        return self.user_id is not None

    def has_role(self, role: str) -> bool:
        """Check if the user has a specific role."""
        return role in self.roles

    @classmethod
    def anonymous(cls) -> SecurityContext:
        """Create an anonymous (unauthenticated) security context."""
        return cls()

    def __str__(self) -> str:
        if self.username is not None:
            return self.username
        return "" if self.user_id is None else str(self.user_id)
