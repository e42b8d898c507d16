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
"""Signing listener — connects SignableBehavior to SQLAlchemy ORM events.

Registers ``before_insert``, ``before_update`` and ``before_delete``
listeners on each signed class so the behavior runs inside every flush.
The actor comes from :func:`~signable.sqlalchemy.session.acting_as` when the
owning session has one bound, otherwise from
:class:`~signable.context.request_context.RequestContext`.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import event

from signable.behavior import SignableBehavior
from signable.sqlalchemy.session import is_suppressed, session_actor

logger = logging.getLogger(__name__)


class SignableEntityListener:
    """Registers SQLAlchemy ORM events that sign records on save and delete.

    Call :meth:`register` once per mapped class at startup. Events propagate
    to subclasses, so registering a base class signs its whole hierarchy. A
    subclass registered while a base already carries the listener is covered
    by the base; if that base is later unregistered, the subclass gets
    listeners of its own and stays signed.
    """

    def __init__(self, behavior: SignableBehavior | None = None) -> None:
        self._behavior = behavior if behavior is not None else SignableBehavior()
        self._registered: set[type] = set()
        self._covered: set[type] = set()

    @property
    def behavior(self) -> SignableBehavior:
        return self._behavior

    def register(
        self,
        cls: type,
        columns: dict[str, str] | None = None,
        user_methods: dict[str, str] | None = None,
    ) -> None:
        """Attach signing listeners to *cls*, optionally overriding its mappings."""
        if not self._behavior.properties.enabled:
            logger.info("Signing disabled by configuration, %s left unsigned", cls.__name__)
            return

        if columns is not None or user_methods is not None:
            self._behavior.configure_model(cls, columns=columns, user_methods=user_methods)

        if self.is_registered(cls):
            if cls not in self._registered:
                self._covered.add(cls)
            return

        self._attach(cls)

    def unregister(self, cls: type) -> None:
        """Detach the listeners previously attached to *cls*.

        Subclasses registered on their own while *cls* covered them are
        re-attached, so only *cls* and its unregistered subclasses stop signing.
        """
        self._covered.discard(cls)
        if cls not in self._registered:
            return
        event.remove(cls, "before_insert", self._on_save)
        event.remove(cls, "before_update", self._on_save)
        event.remove(cls, "before_delete", self._on_delete)
        self._registered.discard(cls)

        for sub in sorted((c for c in self._covered if issubclass(c, cls)), key=lambda c: len(c.__mro__)):
            if not self.is_registered(sub):
                self._covered.discard(sub)
                self._attach(sub)

    def is_registered(self, cls: type) -> bool:
        """Whether *cls* or one of its bases carries this listener."""
        return any(issubclass(cls, registered) for registered in self._registered)

    def _attach(self, cls: type) -> None:
        event.listen(cls, "before_insert", self._on_save, propagate=True)
        event.listen(cls, "before_update", self._on_save, propagate=True)
        event.listen(cls, "before_delete", self._on_delete, propagate=True)
        self._registered.add(cls)
        logger.info("Registered signing listeners on %s", cls.__name__)

    def _on_save(self, mapper: Any, connection: Any, target: Any) -> None:
        if is_suppressed(target):
            return
        self._behavior.before_save(target, actor=session_actor(target))

    def _on_delete(self, mapper: Any, connection: Any, target: Any) -> None:
        if is_suppressed(target):
            return
        self._behavior.before_delete(target, actor=session_actor(target))
