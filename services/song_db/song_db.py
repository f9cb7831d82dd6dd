import sqlite3
import os
import json
import logging
from typing import List, Optional
from contextlib import contextmanager
from datetime import datetime

from common.models.bechdel_status import BechdelStatus
from common.models.models import SongRecord, BechdelResult
from services.song_db.song_repository_interface import SongRepositoryInterface
from .queries import *

logger = logging.getLogger(__name__)


def _py_lower(value):
    return value.lower() if isinstance(value, str) else value


class SongDb(SongRepositoryInterface):
    """SQLite backed song record store"""

    def __init__(self, db_path: str = "bechdel_songs.db"):
        self.db_path = db_path
        self.ensure_database_exists()

    def ensure_database_exists(self):
        if not os.path.exists(self.db_path):
            logger.info(f"Creating new database: {self.db_path}")
        else:
            logger.info(f"Using existing database: {self.db_path}")
        self.create_tables()

    @contextmanager
    def get_connection(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.create_function('PY_LOWER', 1, _py_lower, deterministic=True)
        try:
            yield conn
        finally:
            conn.close()

    def create_tables(self):
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(CREATE_SONGS_TABLE)
            for index_query in INDEXES:
                cursor.execute(index_query)
            conn.commit()

    def put(self, record: SongRecord) -> SongRecord:
        result = record.bechdel_result
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(INSERT_SONG, (
                record.title, record.artist, record.year, record.lyrics,
                json.dumps(record.collaborators) if record.collaborators is not None else None,
                result.status.value if result else None,
                result.confidence if result else None,
                json.dumps(result.to_dict()) if result else None,
                record.created_at.isoformat() if record.created_at else None
            ))
            conn.commit()
            record.id = cursor.lastrowid

        logger.info(f"Saved song '{record.title}' by {record.artist} (ID: {record.id})")
        return record

    def query(
        self,
        text_filter: Optional[str] = None,
        status_filter: Optional[BechdelStatus] = None
    ) -> List[SongRecord]:
        conditions = []
        params = []

        if text_filter:
            like_query = f"%{self._escape_like(text_filter.lower())}%"
            conditions.append(TEXT_FILTER)
            params.extend([like_query, like_query])

        if status_filter:
            conditions.append(STATUS_FILTER)
            params.append(BechdelStatus(status_filter).value)

        sql = SELECT_SONGS
        if conditions:
            sql += ' WHERE ' + ' AND '.join(conditions)
        sql += ORDER_BY_INSERTION

        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(sql, params)
            rows = cursor.fetchall()
            return [self._row_to_song(row) for row in rows]

    def get_song(self, song_id: int) -> Optional[SongRecord]:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(SELECT_SONG_BY_ID, (song_id,))
            row = cursor.fetchone()
            if row:
                return self._row_to_song(row)
            return None

    def count(self) -> int:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(COUNT_SONGS)
            return cursor.fetchone()[0]

    @staticmethod
    def _escape_like(text: str) -> str:
        return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')

    def _row_to_song(self, row) -> SongRecord:
        return SongRecord(
            id=row['id'],
            title=row['title'],
            artist=row['artist'],
            year=row['year'],
            lyrics=row['lyrics'],
            collaborators=json.loads(row['collaborators']) if row['collaborators'] else None,
            bechdel_result=BechdelResult.from_dict(json.loads(row['bechdel_result'])) if row['bechdel_result'] else None,
            created_at=datetime.fromisoformat(row['created_at']) if row['created_at'] else None
        )


def get_database(db_path: Optional[str] = None) -> SongDb:
    """Get a song database instance"""
    if db_path:
        return SongDb(db_path)
    return SongDb()
