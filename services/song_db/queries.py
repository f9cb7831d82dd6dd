"""
Centralized SQL queries for the song record store.
"""

CREATE_SONGS_TABLE = '''
    CREATE TABLE IF NOT EXISTS songs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        artist TEXT NOT NULL,
        year INTEGER,
        lyrics TEXT NOT NULL,
        collaborators TEXT,
        status TEXT,
        confidence INTEGER,
        bechdel_result TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
'''

INDEXES = [
    'CREATE INDEX IF NOT EXISTS idx_songs_status ON songs(status)',
    'CREATE INDEX IF NOT EXISTS idx_songs_year ON songs(year)',
]

INSERT_SONG = '''
    INSERT INTO songs (title, artist, year, lyrics, collaborators, status, confidence, bechdel_result, created_at)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
'''

SELECT_SONG_BY_ID = 'SELECT * FROM songs WHERE id = ?'

# Filters are appended by the caller, rows always come back in insertion order.
# PY_LOWER is registered on each connection, SQLite LOWER only folds ASCII.
SELECT_SONGS = 'SELECT * FROM songs'
TEXT_FILTER = "(PY_LOWER(title) LIKE ? ESCAPE '\\' OR PY_LOWER(artist) LIKE ? ESCAPE '\\')"
STATUS_FILTER = 'status = ?'
ORDER_BY_INSERTION = ' ORDER BY id'

COUNT_SONGS = 'SELECT COUNT(*) FROM songs'
