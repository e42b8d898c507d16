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
"""Signable behavior — stamps records with the acting user.

On save, a new record gets its ``created`` column stamped and a modified
record its ``updated`` column; on delete the ``deleted`` column is stamped.
Which column plays each role, and which attribute of the actor is written
into it, is configured per mapped class::

    signable:
      models:
        Comment:
          columns:
            created: author

Integer columns receive the actor's ``id`` representation and string
columns its ``string`` representation; any other column type is a
:class:`~signable.kernel.exceptions.ConfigurationError`. A role whose column
is not configured or does not exist is skipped silently.

:meth:`SignableBehavior.disable` suppresses the next hook only. The flag is
held in a :class:`~contextvars.ContextVar`, so a ``disable()`` issued while
serving one request is never consumed by a hook running for another.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from signable.config.properties.signing import SignableProperties
from signable.context.request_context import RequestContext
from signable.core.config import Config
from signable.kernel.exceptions import ColumnNotFoundError, ConfigurationError
from signable.logging.port import LoggingPort
from signable.logging.structlog_adapter import StructlogAdapter
from signable.sqlalchemy import schema
from signable.sqlalchemy.schema import ColumnKind

ROLE_CREATED = "created"
ROLE_UPDATED = "updated"
ROLE_DELETED = "deleted"

_enabled_var: ContextVar[bool] = ContextVar("signable_enabled", default=True)


@dataclass(frozen=True)
class RoleBinding:
    """Where and how one role is written on a mapped class."""

    column: str
    attribute: str
    kind: ColumnKind


class SignableBehavior:
    """Resolves the audit column for a lifecycle event and writes the actor into it.

    Args:
        config: Source of ``signable.*`` settings. Packaged defaults when omitted.
        logging_port: Log backend the behavior takes its logger from.
    """

    def __init__(self, config: Config | None = None, logging_port: LoggingPort | None = None) -> None:
        self._config = config if config is not None else Config.defaults()
        self._properties = self._config.bind(SignableProperties)
        self._overrides: dict[type, dict[str, Mapping[str, str]]] = {}
        self._bindings: dict[tuple[type, str], RoleBinding | None] = {}
        port = logging_port if logging_port is not None else StructlogAdapter()
        self._logger = port.get_logger("signable.behavior")

    @property
    def properties(self) -> SignableProperties:
        return self._properties

    # -- skip-once switch ---------------------------------------------------

    @staticmethod
    def enabled() -> bool:
        return _enabled_var.get()

    @staticmethod
    def disable() -> None:
        """Suppress stamping for the next hook invocation only."""
        _enabled_var.set(False)

    @staticmethod
    def enable() -> None:
        _enabled_var.set(True)

    @classmethod
    def _consume_enabled(cls) -> bool:
        if cls.enabled():
            return True
        cls.enable()
        return False

    # -- lifecycle hooks ----------------------------------------------------

    def before_save(self, record: Any, actor: Any = None) -> bool:
        """Stamp ``created`` on new records and ``updated`` on modified ones.

        Both flags are read before anything is written, so a new record that
        already carries changes gets both roles stamped in one call. Every
        role is resolved before the first write: a misconfigured role leaves
        the record untouched.

        Returns:
            False when stamping was skipped (behavior disabled or no actor).
        """
        if not self._consume_enabled():
            self._logger.debug("signing_skipped", model=type(record).__name__, reason="disabled")
            return False

        actor = self._resolve_actor(record, actor)
        if actor is None:
            return False

        roles = []
        if schema.is_new(record):
            roles.append(ROLE_CREATED)
        if schema.is_modified(record):
            roles.append(ROLE_UPDATED)
        self._write(record, [self._prepare(record, role, actor) for role in roles])
        return True

    def before_delete(self, record: Any, actor: Any = None) -> bool:
        """Stamp ``deleted`` on a record about to be removed."""
        if not self._consume_enabled():
            self._logger.debug("signing_skipped", model=type(record).__name__, reason="disabled")
            return False

        actor = self._resolve_actor(record, actor)
        if actor is None:
            return False

        self.stamp(record, ROLE_DELETED, actor)
        return True

    def _resolve_actor(self, record: Any, actor: Any) -> Any:
        if actor is None:
            actor = RequestContext.current_user()
        if actor is None:
            self._logger.debug("signing_skipped", model=type(record).__name__, reason="no_actor")
        return actor

    # -- stamping -----------------------------------------------------------

    def stamp(self, record: Any, role: str, actor: Any) -> bool:
        """Write *actor*'s representation into the column bound to *role*.

        Returns:
            True when a value was written, False when the role has no column
            on this class.

        Raises:
            ConfigurationError: the column is neither integer- nor string-typed.
        """
        return self._write(record, [self._prepare(record, role, actor)]) > 0

    def _prepare(self, record: Any, role: str, actor: Any) -> tuple[RoleBinding, Any] | None:
        cls = type(record)
        binding = self.binding_for(cls, role)
        if binding is None:
            return None
        return binding, self.user_info(cls, actor, binding.kind.value)

    def _write(self, record: Any, pending: list[tuple[RoleBinding, Any] | None]) -> int:
        written = 0
        for item in pending:
            if item is None:
                continue
            binding, value = item
            setattr(record, binding.attribute, value)
            self._logger.debug("record_signed", model=type(record).__name__, column=binding.column, value=value)
            written += 1
        return written

    def binding_for(self, cls: type, role: str) -> RoleBinding | None:
        """Resolve (and cache) the column, attribute and value kind of *role* on *cls*."""
        key = (cls, role)
        if key in self._bindings:
            return self._bindings[key]

        binding: RoleBinding | None = None
        identifier = self.resolve_column_identifier(cls, role)
        if identifier is not None:
            try:
                column = schema.find_column(cls, identifier)
            except ColumnNotFoundError:
                self._logger.debug("role_unused", model=cls.__name__, role=role, column=identifier)
            else:
                kind = schema.column_kind(column)
                if kind is None:
                    raise ConfigurationError(
                        f'[signable] column "{role}" must be int or string',
                        code="SIGNABLE_COLUMN_TYPE",
                        context={"model": cls.__name__, "role": role, "column": identifier},
                    )
                binding = RoleBinding(identifier, schema.attribute_key(cls, column), kind)

        self._bindings[key] = binding
        return binding

    def resolve_column_identifier(self, cls: type, role: str) -> str | None:
        """Qualified ``<table>.<COLUMN>`` identifier of *role*, or None if unconfigured.

        A name already prefixed with the table is returned unchanged.
        """
        column = self.columns_for(cls).get(role)
        if not column:
            return None

        table = schema.table_name(cls)
        if column.startswith(f"{table}."):
            return column
        return f"{table}.{column.upper()}"

    def user_info(self, cls: type, actor: Any, info: str) -> Any:
        """Fetch the *info* representation (``id`` or ``string``) of *actor*."""
        methods = self.user_methods_for(cls)
        try:
            name = methods[info]
        except KeyError:
            raise ConfigurationError(
                f"[signable] no user method configured for '{info}'",
                code="SIGNABLE_CONFIG",
                context={"model": cls.__name__, "info": info},
            ) from None

        value = getattr(actor, name)
        return value() if callable(value) else value

    # -- configuration ------------------------------------------------------

    def configure_model(
        self,
        cls: type,
        columns: Mapping[str, str] | None = None,
        user_methods: Mapping[str, str] | None = None,
    ) -> None:
        """Override the column or user-method mapping for *cls* (and its subclasses)."""
        overrides = self._overrides.setdefault(cls, {})
        if columns is not None:
            overrides["columns"] = dict(columns)
        if user_methods is not None:
            overrides["user_methods"] = dict(user_methods)
        self._bindings = {k: v for k, v in self._bindings.items() if not issubclass(k[0], cls)}

    def columns_for(self, cls: type) -> Mapping[str, str]:
        return self._model_setting(cls, "columns", self._properties.columns)

    def user_methods_for(self, cls: type) -> Mapping[str, str]:
        return self._model_setting(cls, "user_methods", self._properties.user_methods)

    def _model_setting(self, cls: type, name: str, default: Mapping[str, str]) -> Mapping[str, str]:
        for klass in cls.__mro__:
            if name in self._overrides.get(klass, {}):
                return self._overrides[klass][name]
            value = self._config.get(f"signable.models.{klass.__name__}.{name}")
            if value is not None:
                if not isinstance(value, Mapping):
                    raise ConfigurationError(
                        f"[signable] '{name}' for {klass.__name__} must be a mapping",
                        code="SIGNABLE_CONFIG",
                        context={"model": klass.__name__, "setting": name},
                    )
                return value
        return default
