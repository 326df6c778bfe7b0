from __future__ import annotations

import logging
import shutil
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from erpdash.domain.errors import StorageError

log = logging.getLogger("erpdash.storage")


class SqliteKeyValueStorage:
    """Synchronous key -> text blob store kept in a single SQLite file.

    Every ``set`` fully overwrites the value under its key. There is no
    transaction spanning several keys.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = str(db_path)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def init_db(self) -> None:
        self.run_migrations()

    def run_migrations(self) -> None:
        migrations = [
            (1, self._migration_v1_base),
        ]

        conn = self._conn()
        try:
            cur = conn.cursor()
            cur.execute("CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY, applied_at TEXT NOT NULL)")
            cur.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
            current_version = int(cur.fetchone()[0])
            conn.commit()
        finally:
            conn.close()

        pending = [(v, m) for v, m in migrations if v > current_version]
        if not pending:
            return

        backup_path = self._create_pre_migration_backup() if current_version > 0 else None
        conn = self._conn()
        try:
            cur = conn.cursor()
            cur.execute("BEGIN")
            for version, migration in pending:
                migration(cur)
                cur.execute(
                    "INSERT INTO schema_migrations (version, applied_at) VALUES (?, datetime('now'))",
                    (version,),
                )
            conn.commit()
            log.info("storage_migrated from=%s to=%s", current_version, pending[-1][0])
        except sqlite3.Error as exc:
            conn.rollback()
            self._restore_pre_migration_backup(backup_path)
            raise StorageError(
                "Storage migration failed. Original file restored from automatic backup."
            ) from exc
        finally:
            conn.close()

    def _create_pre_migration_backup(self) -> Path | None:
        db_file = Path(self.db_path)
        if not db_file.exists() or db_file.stat().st_size == 0:
            return None
        backup_file = db_file.with_name(f"{db_file.stem}.pre_migration_{datetime.now().strftime('%Y%m%d%H%M%S')}.bak")
        shutil.copy2(db_file, backup_file)
        return backup_file

    def _restore_pre_migration_backup(self, backup_path: Path | None) -> None:
        if backup_path is None or not backup_path.exists():
            return
        shutil.copy2(backup_path, self.db_path)

    def _migration_v1_base(self, cur: sqlite3.Cursor) -> None:
        cur.execute(
            """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT
        )
        """
        )

    # ---------- Key/value ----------
    def get(self, key: str) -> Optional[str]:
        conn = self._conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT value FROM kv_store WHERE key=?", (key,))
            row = cur.fetchone()
        finally:
            conn.close()
        return str(row[0]) if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()
        log.debug("kv_write key=%s bytes=%s", key, len(value))

    def delete(self, key: str) -> None:
        conn = self._conn()
        try:
            conn.execute("DELETE FROM kv_store WHERE key=?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._conn()
        try:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        finally:
            conn.close()
        return [str(r[0]) for r in rows]

    def integrity_check(self) -> str:
        conn = self._conn()
        try:
            row = conn.execute("PRAGMA integrity_check").fetchone()
        finally:
            conn.close()
        return str(row[0]) if row else "unknown"
