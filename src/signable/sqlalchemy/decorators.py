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
"""Class decorator for declaring signed models, and the default listener it uses.

:func:`signed` registers with a process-wide listener unless one is passed.
That listener is built from the packaged defaults on first use; call
:func:`configure` at startup to build it from the application's own
:class:`~signable.core.config.Config` instead::

    signable.configure(Config.from_file("signable.yaml"))
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from signable.behavior import SignableBehavior
from signable.config.properties.logging import LoggingProperties
from signable.core.config import Config
from signable.logging.port import LoggingPort
from signable.logging.structlog_adapter import StructlogAdapter
from signable.sqlalchemy.listener import SignableEntityListener

T = TypeVar("T", bound=type)

_default_listener: SignableEntityListener | None = None


def default_listener() -> SignableEntityListener:
    """Process-wide listener used by :func:`signed` when none is given."""
    global _default_listener
    if _default_listener is None:
        _default_listener = SignableEntityListener()
    return _default_listener


def set_default_listener(listener: SignableEntityListener | None) -> None:
    """Replace the process-wide listener; ``None`` rebuilds it from defaults on next use.

    Classes already registered keep the listener they were registered with.
    """
    global _default_listener
    _default_listener = listener


def configure(config: Config | None = None, logging_port: LoggingPort | None = None) -> SignableEntityListener:
    """Build the default listener from *config* and install it.

    When ``signable.logging.enabled`` is true, *logging_port* (structlog by
    default) is configured from ``signable.logging`` as well.
    """
    config = config if config is not None else Config.defaults()
    port = logging_port if logging_port is not None else StructlogAdapter()
    if config.bind(LoggingProperties).enabled:
        port.configure(config)

    listener = SignableEntityListener(SignableBehavior(config, logging_port=port))
    set_default_listener(listener)
    return listener


def signed(
    columns: dict[str, str] | None = None,
    user_methods: dict[str, str] | None = None,
    listener: SignableEntityListener | None = None,
) -> Callable[[T], T]:
    """Register the decorated mapped class for signing.

    Usage:
        @signed(columns={"created": "author"})
        class Comment(Base):
            __tablename__ = "comment"
            ...
    """

    def decorator(cls: T) -> T:
        (listener or default_listener()).register(cls, columns=columns, user_methods=user_methods)
        return cls

    return decorator
