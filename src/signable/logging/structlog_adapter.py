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
"""StructlogAdapter — structlog-backed LoggingPort for signable's own loggers.

Only the ``signable`` logger namespace is configured: a stdout handler is
installed on it, ``signable.logging.level.root`` sets its level, and every
other key under ``signable.logging.level`` sets the level of that named
logger. The hosting application's root logger is left as it was.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from signable.config.properties.logging import LoggingProperties
from signable.core.config import Config

NAMESPACE = "signable"


class StructlogAdapter:
    """Logging adapter backed by structlog over the stdlib ``signable`` logger."""

    def __init__(self) -> None:
        self._level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}
        self._handler: logging.Handler | None = None

    @property
    def level(self) -> str:
        return self._level

    @property
    def format(self) -> str:
        return self._format

    @property
    def module_levels(self) -> dict[str, str]:
        return dict(self._module_levels)

    def configure(self, config: Config) -> None:
        """Apply ``signable.logging`` to structlog and the ``signable`` loggers."""
        props = config.bind(LoggingProperties)
        levels = {str(name): str(level).upper() for name, level in dict(props.level).items()}
        self._level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(props.format).lower()

        renderer: Any
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )

        self._install_handler()
        self.set_level(NAMESPACE, self._level)
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the level of the stdlib logger *name*; unknown levels fall back to INFO."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def reset(self) -> None:
        """Detach the handler installed by :meth:`configure` and restore structlog defaults."""
        namespace = logging.getLogger(NAMESPACE)
        if self._handler is not None:
            namespace.removeHandler(self._handler)
            self._handler = None
        namespace.propagate = True
        structlog.reset_defaults()

    def _install_handler(self) -> None:
        namespace = logging.getLogger(NAMESPACE)
        if self._handler is not None:
            namespace.removeHandler(self._handler)
        self._handler = logging.StreamHandler(sys.stdout)
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        namespace.addHandler(self._handler)
        namespace.propagate = False
