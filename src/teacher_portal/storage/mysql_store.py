from __future__ import annotations

from typing import List, Optional

from .mysql_base import MySQLConnectionFactory, db_cursor
from .repository import KeyValueStore


def _like_prefix(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"


class MySQLKeyValueStore(KeyValueStore):
    """Key-value store over the ``kv_store`` table, shared by every app worker."""

    def __init__(self, conn_factory: MySQLConnectionFactory):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_value FROM kv_store WHERE store_key=%s", (key,))
            row = cur.fetchone()
            return row["store_value"] if row else None

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(store_key, store_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv_store WHERE store_key=%s", (key,))

    def keys(self, prefix: str = "") -> List[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT store_key FROM kv_store WHERE store_key LIKE %s ORDER BY store_key",
                (_like_prefix(prefix),),
            )
            return [str(r["store_key"]) for r in cur.fetchall() or []]
