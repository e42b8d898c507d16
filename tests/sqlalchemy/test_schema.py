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
"""Tests for the schema lookups used by the signing behavior."""

import enum

import pytest
from sqlalchemy import BigInteger, Boolean, Enum, ForeignKey, Integer, String, Text, TypeDecorator, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from signable.kernel.exceptions import ColumnNotFoundError
from signable.sqlalchemy import schema
from signable.sqlalchemy.schema import ColumnKind


class Status(enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class LabelString(TypeDecorator):
    impl = String
    cache_ok = True


class Base(DeclarativeBase):
    pass


class Document(Base):
    __tablename__ = "document"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str | None] = mapped_column(String(200))
    creator: Mapped[int | None] = mapped_column("created_by", Integer)
    updated_by: Mapped[int | None] = mapped_column(BigInteger)
    notes: Mapped[str | None] = mapped_column(Text)
    status: Mapped[Status | None] = mapped_column(Enum(Status))
    archived: Mapped[bool | None] = mapped_column(Boolean)
    reviewer: Mapped[str | None] = mapped_column(LabelString)


class Person(Base):
    __tablename__ = "person"

    id: Mapped[int] = mapped_column(primary_key=True)
    kind: Mapped[str] = mapped_column(String(20))
    created_by: Mapped[str | None] = mapped_column(String(100))

    __mapper_args__ = {"polymorphic_on": "kind", "polymorphic_identity": "person"}


class Employee(Person):
    __tablename__ = "employee"

    id: Mapped[int] = mapped_column(ForeignKey("person.id"), primary_key=True)
    badge: Mapped[str | None] = mapped_column(String(20))

    __mapper_args__ = {"polymorphic_identity": "employee"}


class TestTableName:
    def test_table_name(self):
        assert schema.table_name(Document) == "document"

    def test_joined_subclass_uses_own_table(self):
        assert schema.table_name(Employee) == "employee"


class TestFindColumn:
    def test_qualified_uppercase_identifier(self):
        column = schema.find_column(Document, "document.CREATED_BY")
        assert column.name == "created_by"

    def test_qualified_lowercase_identifier(self):
        column = schema.find_column(Document, "document.created_by")
        assert column.name == "created_by"

    def test_bare_identifier(self):
        assert schema.find_column(Document, "TITLE").name == "title"

    def test_missing_column_raises(self):
        with pytest.raises(ColumnNotFoundError) as exc_info:
            schema.find_column(Document, "document.DELETED_BY")
        assert exc_info.value.context == {"model": "Document", "column": "document.DELETED_BY"}

    def test_inherited_column_is_found(self):
        column = schema.find_column(Employee, "employee.CREATED_BY")
        assert column.table.name == "person"


class TestColumnKind:
    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("created_by", ColumnKind.ID),
            ("updated_by", ColumnKind.ID),
            ("title", ColumnKind.STRING),
            ("notes", ColumnKind.STRING),
            ("reviewer", ColumnKind.STRING),
            ("status", None),
            ("archived", None),
        ],
    )
    def test_kinds(self, identifier, expected):
        assert schema.column_kind(schema.find_column(Document, identifier)) is expected


class TestAttributeKey:
    def test_attribute_named_differently_from_column(self):
        column = schema.find_column(Document, "document.CREATED_BY")
        assert schema.attribute_key(Document, column) == "creator"

    def test_attribute_named_like_column(self):
        column = schema.find_column(Document, "document.UPDATED_BY")
        assert schema.attribute_key(Document, column) == "updated_by"


class TestLifecycleFlags:
    def test_transient_record_is_new(self):
        assert schema.is_new(Document()) is True

    def test_untouched_record_is_not_modified(self):
        assert schema.is_modified(Document()) is False

    def test_assigned_record_is_modified(self):
        assert schema.is_modified(Document(title="Minutes")) is True

    def test_persisted_record(self):
        engine = create_engine("sqlite://")
        Base.metadata.create_all(engine)
        with Session(engine) as session:
            document = Document(title="Minutes")
            session.add(document)
            session.flush()

            assert schema.is_new(document) is False
            assert schema.is_modified(document) is False

            document.title = "Minutes v2"
            assert schema.is_modified(document) is True
        engine.dispose()
