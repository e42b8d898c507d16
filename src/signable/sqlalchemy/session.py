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
"""Per-session signing options: explicit actor and suppression.

Both helpers accept a :class:`~sqlalchemy.orm.Session` or an
:class:`~sqlalchemy.ext.asyncio.AsyncSession` and store their option in
``Session.info`` for the duration of the ``with`` block::

    with acting_as(session, current_user):
        session.flush()

    with suppressed(session):
        session.flush()  # nothing is stamped
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from typing import Any

from sqlalchemy.orm import Session, object_session

ACTOR_KEY = "signable.actor"
SUPPRESS_KEY = "signable.suppressed"

_MISSING = object()


def _info(session: Any) -> dict[str, Any]:
    # AsyncSession proxies a sync Session; events only ever see the latter.
    return getattr(session, "sync_session", session).info


@contextlib.contextmanager
def _session_option(session: Any, key: str, value: Any) -> Iterator[Any]:
    info = _info(session)
    previous = info.get(key, _MISSING)
    info[key] = value
    try:
        yield session
    finally:
        if previous is _MISSING:
            info.pop(key, None)
        else:
            info[key] = previous


def acting_as(session: Any, actor: Any) -> contextlib.AbstractContextManager[Any]:
    """Attribute every flush of *session* inside the block to *actor*."""
    return _session_option(session, ACTOR_KEY, actor)


def suppressed(session: Any) -> contextlib.AbstractContextManager[Any]:
    """Skip stamping for every flush of *session* inside the block."""
    return _session_option(session, SUPPRESS_KEY, True)


def session_actor(record: Any) -> Any:
    """Actor bound to the session that owns *record*, or None."""
    session: Session | None = object_session(record)
    if session is None:
        return None
    return session.info.get(ACTOR_KEY)


def is_suppressed(record: Any) -> bool:
    session: Session | None = object_session(record)
    return session is not None and bool(session.info.get(SUPPRESS_KEY, False))
