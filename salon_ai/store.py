# SQLite storage for content pulled from Notion.
#   casts(name UNIQUE, ..., photos_json)
#   notion_pages(notion_page_id UNIQUE, title, slug, content_json)
#   shifts(cast_id, shift_date, start_time, end_time, status, created_by)

from __future__ import annotations

import json
import os
import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from salon_ai.estama.types import ShiftRow
from salon_ai.notion.types import CastRecord, NotionPageRecord

_SCHEMA = """
CREATE TABLE IF NOT EXISTS casts (
    id                   INTEGER PRIMARY KEY AUTOINCREMENT,
    name                 TEXT NOT NULL UNIQUE,
    room                 TEXT,
    type                 TEXT,
    status               TEXT,
    profile              TEXT,
    execution_date_start TEXT,
    execution_date_end   TEXT,
    hp_notice            TEXT,
    upload_check         TEXT,
    photos_json          TEXT NOT NULL DEFAULT '[]',
    photo                TEXT,
    x_account            TEXT,
    updated_at           TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS notion_pages (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    notion_page_id TEXT NOT NULL UNIQUE,
    title          TEXT,
    slug           TEXT,
    content_json   TEXT,
    updated_at     TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS shifts (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    cast_id     INTEGER NOT NULL REFERENCES casts(id),
    shift_date  TEXT NOT NULL,
    start_time  TEXT NOT NULL,
    end_time    TEXT NOT NULL,
    status      TEXT NOT NULL,
    created_by  TEXT NOT NULL,
    created_at  TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

_CAST_COLUMNS = (
    "name", "room", "type", "status", "profile",
    "execution_date_start", "execution_date_end",
    "hp_notice", "upload_check", "photos_json", "photo", "x_account",
)


def init_sqlite(db_path: str) -> sqlite3.Connection:
    """Connect to the DB (creating parent dirs and schema if missing)."""
    if db_path != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.executescript(_SCHEMA)
    conn.commit()
    return conn


def _cast_row(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    d["photos"] = json.loads(d.pop("photos_json") or "[]")
    return d


def _page_row(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    d["content"] = json.loads(d.pop("content_json") or "null")
    return d


class SalonStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = init_sqlite(self.db_path)
        return self._conn

    # -------------------------
    # Casts
    # -------------------------
    def upsert_cast(self, cast: CastRecord) -> Dict[str, Any]:
        """Insert or update a cast by name; returns the stored row."""
        values = (
            cast.name, cast.room, cast.type, cast.status, cast.profile,
            cast.execution_date_start, cast.execution_date_end,
            cast.hp_notice, cast.upload_check,
            json.dumps(cast.photos, ensure_ascii=False), cast.photo, cast.x_account,
        )
        updates = ",\n            ".join(f"{c}=excluded.{c}" for c in _CAST_COLUMNS if c != "name")
        conn = self._get_conn()
        conn.execute(
            f"""
            INSERT INTO casts ({", ".join(_CAST_COLUMNS)})
            VALUES ({", ".join("?" for _ in _CAST_COLUMNS)})
            ON CONFLICT(name) DO UPDATE SET
            {updates},
            updated_at=CURRENT_TIMESTAMP
            """,
            values,
        )
        conn.commit()
        return self.get_cast(cast.name)

    def get_cast(self, name: str) -> Optional[Dict[str, Any]]:
        row = self._get_conn().execute("SELECT * FROM casts WHERE name = ? LIMIT 1;", (name,)).fetchone()
        return _cast_row(row) if row else None

    def list_casts(self) -> List[Dict[str, Any]]:
        rows = self._get_conn().execute("SELECT * FROM casts ORDER BY name;").fetchall()
        return [_cast_row(r) for r in rows]

    def find_cast_by_name_nocase(self, name: str) -> Optional[Dict[str, Any]]:
        row = self._get_conn().execute(
            "SELECT * FROM casts WHERE name = ? COLLATE NOCASE ORDER BY id LIMIT 1;",
            (name,),
        ).fetchone()
        return _cast_row(row) if row else None

    def update_cast_photo(self, cast_id: int, photo_url: str):
        conn = self._get_conn()
        conn.execute(
            "UPDATE casts SET photo = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?;",
            (photo_url, cast_id),
        )
        conn.commit()

    def cast_ids_by_name(self) -> Dict[str, int]:
        rows = self._get_conn().execute("SELECT id, name FROM casts;").fetchall()
        return {r["name"]: r["id"] for r in rows}

    # -------------------------
    # Notion pages
    # -------------------------
    def upsert_notion_page(self, page: NotionPageRecord) -> Dict[str, Any]:
        conn = self._get_conn()
        conn.execute(
            """
            INSERT INTO notion_pages (notion_page_id, title, slug, content_json)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(notion_page_id) DO UPDATE SET
                title=excluded.title,
                slug=excluded.slug,
                content_json=excluded.content_json,
                updated_at=CURRENT_TIMESTAMP
            """,
            (page.notion_page_id, page.title, page.slug, json.dumps(page.content, ensure_ascii=False)),
        )
        conn.commit()
        return self.get_notion_page(page.notion_page_id)

    def get_notion_page(self, notion_page_id: str) -> Optional[Dict[str, Any]]:
        row = self._get_conn().execute(
            "SELECT * FROM notion_pages WHERE notion_page_id = ? LIMIT 1;",
            (notion_page_id,),
        ).fetchone()
        return _page_row(row) if row else None

    # -------------------------
    # Shifts
    # -------------------------
    def replace_shifts_from(self, shift_date: str, shifts: Iterable[ShiftRow]):
        """Delete shifts dated `shift_date` or later and insert `shifts`, atomically."""
        conn = self._get_conn()
        with conn:
            conn.execute("DELETE FROM shifts WHERE shift_date >= ?;", (shift_date,))
            conn.executemany(
                """
                INSERT INTO shifts (cast_id, shift_date, start_time, end_time, status, created_by)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [(s.cast_id, s.shift_date, s.start_time, s.end_time, s.status, s.created_by) for s in shifts],
            )

    def list_shifts(self) -> List[Dict[str, Any]]:
        rows = self._get_conn().execute("SELECT * FROM shifts ORDER BY shift_date, id;").fetchall()
        return [dict(r) for r in rows]

    # -------------------------
    # Cleanup
    # -------------------------
    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
