"""
Row store - thin CRUD client over the relational store.

Exposes table-level insert/select/update/delete with equality and range
filters, nothing more. No joins: callers combine tables in memory.
Each write is committed on its own; there are no cross-call transactions.
"""
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from breadcrumb.errors import StoreError
from breadcrumb.infrastructure.db import models  # registers tables on Base.metadata
from breadcrumb.infrastructure.db.session import Base

logger = logging.getLogger(__name__)

TABLES = frozenset({"users", "activities", "activity_markers", "daily_records"})


@dataclass(frozen=True)
class Filter:
    column: str
    op: str  # "eq" | "gte" | "lte"
    value: Any


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


class RowStore:
    """
    Usage:
        store = RowStore(db)
        row = store.insert("activities", {"user_id": 1, "name": "Exercise"})
        rows = store.select("daily_records", eq("user_id", 1), gte("date", "2026-03-01"))
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, table_name: str, values: dict[str, Any]) -> dict[str, Any]:
        table = self._table(table_name)
        self._check_columns(table, values)
        try:
            result = self.db.execute(insert(table).values(**values))
            row_id = result.inserted_primary_key[0]
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail(f"insert into {table_name}", exc)
        rows = self.select(table_name, eq("id", row_id))
        if not rows:
            raise StoreError(f"insert into {table_name}: row {row_id} not readable after write")
        return rows[0]

    def select(self, table_name: str, *filters: Filter) -> list[dict[str, Any]]:
        table = self._table(table_name)
        stmt = select(table).where(*self._clauses(table, filters)).order_by(table.c.id)
        try:
            result = self.db.execute(stmt)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            self._fail(f"select from {table_name}", exc)

    def update(self, table_name: str, values: dict[str, Any], *filters: Filter) -> list[dict[str, Any]]:
        table = self._table(table_name)
        self._check_columns(table, values)
        clauses = self._clauses(table, filters)
        try:
            ids = list(self.db.execute(select(table.c.id).where(*clauses)).scalars().all())
            if ids:
                self.db.execute(update(table).where(table.c.id.in_(ids)).values(**values))
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail(f"update {table_name}", exc)
        if not ids:
            return []
        return self._rows_by_ids(table, ids)

    def delete(self, table_name: str, *filters: Filter) -> int:
        table = self._table(table_name)
        clauses = self._clauses(table, filters)
        try:
            result = self.db.execute(delete(table).where(*clauses))
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail(f"delete from {table_name}", exc)
        return result.rowcount

    # --- internals ---

    def _rows_by_ids(self, table: Table, ids: list[int]) -> list[dict[str, Any]]:
        stmt = select(table).where(table.c.id.in_(ids)).order_by(table.c.id)
        try:
            return [dict(row) for row in self.db.execute(stmt).mappings().all()]
        except SQLAlchemyError as exc:
            self._fail(f"select from {table.name}", exc)

    def _table(self, table_name: str) -> Table:
        if table_name not in TABLES:
            raise StoreError(f"Unknown table: {table_name}")
        return Base.metadata.tables[table_name]

    def _check_columns(self, table: Table, values: dict[str, Any]) -> None:
        unknown = set(values) - set(table.c.keys())
        if unknown:
            raise StoreError(f"Unknown columns for {table.name}: {sorted(unknown)}")

    def _clauses(self, table: Table, filters: tuple[Filter, ...]) -> list:
        clauses = []
        for f in filters:
            if f.column not in table.c:
                raise StoreError(f"Unknown column for {table.name}: {f.column}")
            col = table.c[f.column]
            if f.op == "eq":
                clauses.append(col == f.value)
            elif f.op == "gte":
                clauses.append(col >= f.value)
            elif f.op == "lte":
                clauses.append(col <= f.value)
            else:
                raise StoreError(f"Unknown filter operator: {f.op}")
        return clauses

    def _fail(self, action: str, exc: SQLAlchemyError):
        self.db.rollback()
        logger.error("Store call failed: %s: %s", action, exc)
        raise StoreError(f"{action} failed: {exc.__class__.__name__}") from exc
