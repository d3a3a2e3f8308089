"""Database layer - engine, base classes and types."""

from books_kernel.db.base import UUID, Base, TrackedBase, UUIDString
from books_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from books_kernel.db.types import money_column_type, round_money

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "drop_tables",
    "reset_engine",
    "Base",
    "TrackedBase",
    "UUIDString",
    "UUID",
    "money_column_type",
    "round_money",
]
