from collections.abc import Mapping
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from asset_pipeline.database.connection import get_connection


class AssetRecordRepository:
    """Database operations for the durable per-item image record table."""

    def __init__(self, table: str) -> None:
        self._table = sql.Identifier(table)
        self._table_ready = False

    async def ensure_table(self) -> None:
        """Create the record table on first use. No-op afterwards."""
        if self._table_ready:
            return
        async with get_connection() as conn:
            await conn.execute(
                sql.SQL(
                    """
                    CREATE TABLE IF NOT EXISTS {} (
                        item_id TEXT PRIMARY KEY,
                        record JSONB NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                ).format(self._table)
            )
            await conn.commit()
        self._table_ready = True

    async def find_by_item_id(self, item_id: str) -> dict[str, Any] | None:
        """Return the stored record for an item, or None when absent."""
        await self.ensure_table()
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    sql.SQL("SELECT record FROM {} WHERE item_id = %s").format(self._table),
                    (item_id,),
                )
                row = await cur.fetchone()

        if row is None:
            return None
        return row["record"]

    async def save(self, item_id: str, record: Mapping[str, Any]) -> None:
        """Insert or replace the record for an item."""
        await self.ensure_table()
        async with get_connection() as conn:
            await conn.execute(
                sql.SQL(
                    """
                    INSERT INTO {} (item_id, record)
                    VALUES (%s, %s)
                    ON CONFLICT (item_id)
                    DO UPDATE SET record = EXCLUDED.record, updated_at = NOW()
                    """
                ).format(self._table),
                (item_id, Jsonb(dict(record))),
            )
            await conn.commit()

    async def delete(self, item_id: str) -> bool:
        """Delete the record for an item. Returns True when a row was removed."""
        await self.ensure_table()
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    sql.SQL("DELETE FROM {} WHERE item_id = %s").format(self._table),
                    (item_id,),
                )
                deleted = cur.rowcount > 0
            await conn.commit()
        return deleted
