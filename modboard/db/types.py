from __future__ import annotations

from enum import Enum
from typing import TypeVar

from sqlalchemy import JSON, BigInteger, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.types import TypeEngine

EnumType = TypeVar("EnumType", bound=Enum)


def db_enum(enum_cls: type[EnumType], name: str) -> SAEnum:
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
        create_constraint=False,
    )


def _pg_array(item_type: TypeEngine) -> TypeEngine:
    # Plain JSON lists stand in for Postgres arrays on other dialects (sqlite test engines).
    return ARRAY(item_type).with_variant(JSON(), "sqlite")


def bigint_array() -> TypeEngine:
    return _pg_array(BigInteger())


def text_array() -> TypeEngine:
    return _pg_array(Text())


def jsonb_array() -> TypeEngine:
    return _pg_array(JSONB())
