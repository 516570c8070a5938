import sqlite3
from pathlib import Path
from typing import Any, Mapping

from src.media_import.domain.models import MediaRecord

_COLUMNS = (
    "id",
    "hash",
    "name",
    "ext",
    "mime",
    "size",
    "url",
    "alternative_text",
    "caption",
    "created_by",
)
_FILTERABLE = frozenset(_COLUMNS)


class SQLiteMediaRegistry:
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        self.init_schema()

    def init_schema(self) -> None:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS files (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                hash TEXT NOT NULL,
                name TEXT NOT NULL,
                ext TEXT NOT NULL DEFAULT '',
                mime TEXT NOT NULL DEFAULT '',
                size INTEGER NOT NULL DEFAULT 0,
                url TEXT NOT NULL DEFAULT '',
                alternative_text TEXT NOT NULL DEFAULT '',
                caption TEXT NOT NULL DEFAULT '',
                created_by TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_files_hash ON files(hash)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_files_name ON files(name)")
        self.conn.commit()

    async def find_one(self, record_id: int) -> MediaRecord | None:
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {', '.join(_COLUMNS)} FROM files WHERE id = ?", (record_id,))
        row = cursor.fetchone()
        return self._to_record(row) if row else None

    async def find_many(self, filters: Mapping[str, Any], limit: int) -> list[MediaRecord]:
        unknown = set(filters) - _FILTERABLE
        if unknown:
            raise ValueError(f"Unsupported filter fields: {sorted(unknown)}")

        where = " AND ".join(f"{field} = ?" for field in filters) or "1 = 1"
        cursor = self.conn.cursor()
        cursor.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM files WHERE {where} ORDER BY id LIMIT ?",
            (*filters.values(), limit),
        )
        return [self._to_record(row) for row in cursor.fetchall()]

    async def create(self, payload: Mapping[str, Any], user: Any) -> MediaRecord:
        cursor = self.conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO files (hash, name, ext, mime, size, url, alternative_text, caption, created_by)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payload["hash"],
                    payload["name"],
                    payload.get("ext", ""),
                    payload.get("mime", ""),
                    int(payload.get("size", 0)),
                    payload.get("url", ""),
                    payload.get("alternative_text", ""),
                    payload.get("caption", ""),
                    None if user is None else str(user),
                ),
            )
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

        return await self._require(cursor.lastrowid)

    async def update_id(self, record_id: int, new_id: int) -> MediaRecord:
        cursor = self.conn.cursor()
        try:
            cursor.execute("UPDATE files SET id = ? WHERE id = ?", (new_id, record_id))
            if cursor.rowcount == 0:
                raise LookupError(f"Media record {record_id} does not exist.")
            self.conn.commit()
        except (sqlite3.Error, LookupError):
            self.conn.rollback()
            raise

        return await self._require(new_id)

    async def _require(self, record_id: int) -> MediaRecord:
        record = await self.find_one(record_id)
        if record is None:
            raise LookupError(f"Media record {record_id} does not exist.")
        return record

    @staticmethod
    def _to_record(row: tuple) -> MediaRecord:
        values = dict(zip(_COLUMNS, row))
        return MediaRecord(**values)

    def close(self) -> None:
        self.conn.close()
