from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import LookupItem, OfficeLocation
from .repository import LocationRepository, LookupRepository

# table -> name column; identifiers are never taken from user input
LOOKUP_TABLES = {
    "departments": "name",
    "positions": "name",
    "bank_info": "bank_name",
}


class MySQLLookupRepository(LookupRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, table: str):
        if table not in LOOKUP_TABLES:
            raise ValueError(f"Unsupported lookup table: {table}")
        self._conn_factory = conn_factory
        self._table = table
        self._name_col = LOOKUP_TABLES[table]

    def _select(self) -> str:
        return f"SELECT id, {self._name_col} AS name, is_active FROM {self._table}"

    @staticmethod
    def _to_item(r: dict) -> LookupItem:
        return LookupItem(id=int(r["id"]), name=r["name"], is_active=bool(r["is_active"]))

    def list_all(self) -> Sequence[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._select() + f" ORDER BY {self._name_col}")
            return [self._to_item(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._select() + f" WHERE is_active=1 ORDER BY {self._name_col}")
            return [self._to_item(r) for r in fetchall(cur)]

    def get_by_id(self, item_id: int) -> Optional[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._select() + " WHERE id=%s", (int(item_id),))
            row = fetchone(cur)
            return self._to_item(row) if row else None

    def get_by_name(self, name: str) -> Optional[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._select() + f" WHERE LOWER({self._name_col})=LOWER(%s)", (name,))
            row = fetchone(cur)
            return self._to_item(row) if row else None

    def create(self, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO {self._table}({self._name_col}, is_active) VALUES(%s, 1)", (name,))
            return int(cur.lastrowid)

    def set_active(self, item_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self._table} SET is_active=%s WHERE id=%s",
                (1 if is_active else 0, int(item_id)),
            )
            return cur.rowcount > 0


class MySQLLocationRepository(LocationRepository):
    """Single-row table (id=1)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, latitude, longitude, radius_meters FROM office_location WHERE id=1")
            row = fetchone(cur)
            if not row:
                return None
            return OfficeLocation(
                name=row["name"],
                latitude=as_decimal(row["latitude"]),
                longitude=as_decimal(row["longitude"]),
                radius_meters=int(row["radius_meters"]),
            )

    def save(self, location: OfficeLocation) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO office_location(id, name, latitude, longitude, radius_meters, updated_at)
                VALUES(1, %s, %s, %s, %s, NOW())
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), latitude=VALUES(latitude), longitude=VALUES(longitude),
                    radius_meters=VALUES(radius_meters), updated_at=NOW()
                """,
                (location.name, location.latitude, location.longitude, int(location.radius_meters)),
            )
