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
"""Request-scoped context backed by contextvars.

The hosting application creates a RequestContext per request (or task) and
attaches the caller's SecurityContext; the signing behavior falls back to it
when no actor is passed explicitly.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Any

from signable.security.context import SecurityContext

_request_context_var: ContextVar[RequestContext | None] = ContextVar(
    "signable_request_context", default=None
)


class RequestContext:
    """Holds per-request state: request ID, security context, and custom attributes.

    Use ``RequestContext.init()`` to create a new context for the current
    thread or async task, and ``RequestContext.current()`` to retrieve it.
    """

    def __init__(
        self,
        request_id: str | None = None,
        security_context: SecurityContext | None = None,
    ) -> None:
        self._request_id = request_id or uuid.uuid4().hex
        self._security_context = security_context
        self._attributes: dict[str, Any] = {}

    @property
    def request_id(self) -> str:
        return self._request_id

    @property
    def security_context(self) -> SecurityContext | None:
        return self._security_context

    @security_context.setter
    def security_context(self, value: SecurityContext | None) -> None:
        self._security_context = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    @classmethod
    def init(
        cls,
        request_id: str | None = None,
        security_context: SecurityContext | None = None,
    ) -> RequestContext:
        """Create and set a new RequestContext for the current context."""
        ctx = cls(request_id=request_id, security_context=security_context)
        _request_context_var.set(ctx)
        return ctx

    @classmethod
    def current(cls) -> RequestContext | None:
        return _request_context_var.get()

    @classmethod
    def clear(cls) -> None:
        _request_context_var.set(None)

    @classmethod
    def current_user(cls) -> SecurityContext | None:
        """The authenticated principal of the current request, or None."""
        ctx = _request_context_var.get()
        if ctx is None:
            return None
        sc = ctx.security_context
        if sc is None or not sc.is_authenticated:
            return None
        return sc
