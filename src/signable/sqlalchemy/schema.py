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
"""Schema lookups the signing behavior needs from a mapped class.

Everything here goes through the public inspection API
(:func:`sqlalchemy.inspect`, :class:`~sqlalchemy.orm.Mapper`); the behavior
never reaches into mapper internals itself.
"""

from __future__ import annotations

import enum
from typing import Any

from sqlalchemy import Column, Enum, Integer, String, inspect
from sqlalchemy.orm import Mapper
from sqlalchemy.types import TypeDecorator, TypeEngine

from signable.kernel.exceptions import ColumnNotFoundError


class ColumnKind(enum.Enum):
    """Which representation of the actor a column stores."""

    ID = "id"
    STRING = "string"


def _mapper(cls: type) -> Mapper[Any]:
    return inspect(cls)


def table_name(cls: type) -> str:
    """Name of the table the class is mapped to (without schema)."""
    return _mapper(cls).local_table.name


def find_column(cls: type, identifier: str) -> Column[Any]:
    """Return the mapped column named by *identifier*.

    *identifier* is either a bare column name or ``<table>.<column>``; the
    column part is matched case-insensitively against every column mapped by
    the class, inherited ones included.

    Raises:
        ColumnNotFoundError: no mapped column carries that name.
    """
    prefix = f"{table_name(cls)}."
    name = identifier[len(prefix):] if identifier.startswith(prefix) else identifier
    wanted = name.upper()

    for column in _mapper(cls).columns:
        if isinstance(column, Column) and column.name.upper() == wanted:
            return column

    raise ColumnNotFoundError(
        f"Column '{identifier}' not found on {cls.__name__}",
        code="SIGNABLE_COLUMN_NOT_FOUND",
        context={"model": cls.__name__, "column": identifier},
    )


def column_kind(column: Column[Any]) -> ColumnKind | None:
    """Classify a column's declared type; None when it is neither integer- nor string-like."""
    col_type: TypeEngine[Any] = column.type
    while isinstance(col_type, TypeDecorator):
        col_type = col_type.impl

    if isinstance(col_type, Integer):
        return ColumnKind.ID
    # Enum derives from String but only admits its declared members.
    if isinstance(col_type, String) and not isinstance(col_type, Enum):
        return ColumnKind.STRING
    return None


def attribute_key(cls: type, column: Column[Any]) -> str:
    """Name of the mapped attribute that owns *column*."""
    return _mapper(cls).get_property_by_column(column).key


def is_new(record: Any) -> bool:
    """Whether *record* has not been persisted yet."""
    return not inspect(record).has_identity


def is_modified(record: Any) -> bool:
    """Whether any column attribute of *record* has pending changes."""
    state = inspect(record)
    return any(
        state.attrs[key].history.has_changes()
        for key in state.mapper.column_attrs.keys()
    )
