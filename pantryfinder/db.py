"""SQLite persistence for pantries, politicians and candidates.

A ``PantryStore`` is created once by the app factory (or a maintenance
script) and handed to whoever needs it. Every call opens its own
connection, so the store is safe to share between request threads.
"""

import os
import sqlite3
from contextlib import contextmanager

SCHEMA = '''
CREATE TABLE IF NOT EXISTS pantries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    address TEXT,
    notes TEXT,
    lat REAL,
    lng REAL,
    hours TEXT,
    type TEXT,
    repeating TEXT,
    deleted INTEGER DEFAULT 0
);
CREATE TABLE IF NOT EXISTS politicians (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    office TEXT,
    state TEXT,
    district INTEGER,
    party TEXT,
    term_end_date TEXT,
    lat REAL,
    lng REAL,
    website TEXT
);
CREATE TABLE IF NOT EXISTS candidates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    office TEXT,
    state TEXT,
    district INTEGER,
    party TEXT,
    lat REAL,
    lng REAL,
    website TEXT,
    phone TEXT,
    show_on_map INTEGER DEFAULT 0,
    office_type TEXT,
    country TEXT
);
'''

PANTRY_COLUMNS = ('name', 'address', 'notes', 'lat', 'lng', 'hours', 'type', 'repeating')
POLITICIAN_COLUMNS = (
    'name', 'office', 'state', 'district', 'party', 'term_end_date', 'lat', 'lng', 'website',
)
CANDIDATE_COLUMNS = (
    'name', 'office', 'state', 'district', 'party', 'lat', 'lng',
    'website', 'phone', 'show_on_map', 'office_type', 'country',
)
TABLES = ('pantries', 'politicians', 'candidates')


class PantryStore:

    def __init__(self, path):
        self.path = str(path)

    def __repr__(self):
        return f'PantryStore({self.path!r})'

    @contextmanager
    def connect(self):
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def exists(self):
        return os.path.exists(self.path)

    def init_schema(self):
        """Create the data directory and any missing tables."""
        parent = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(parent, exist_ok=True)
        with self.connect() as conn:
            conn.executescript(SCHEMA)

    def _insert(self, table, columns, data, **fixed):
        values = {col: data.get(col) for col in columns}
        values.update(fixed)
        names = ', '.join(values)
        marks = ', '.join('?' for _ in values)
        with self.connect() as conn:
            cur = conn.execute(
                f'INSERT INTO {table} ({names}) VALUES ({marks})',
                tuple(values.values()),
            )
            row = conn.execute(
                f'SELECT * FROM {table} WHERE id = ?', (cur.lastrowid,)
            ).fetchone()
        return dict(row)

    def _select(self, sql, params=()):
        with self.connect() as conn:
            return [dict(r) for r in conn.execute(sql, params).fetchall()]

    # pantries

    def list_pantries(self):
        return self._select('SELECT * FROM pantries WHERE deleted = 0 ORDER BY id')

    def get_pantry(self, pantry_id):
        rows = self._select(
            'SELECT * FROM pantries WHERE id = ? AND deleted = 0', (pantry_id,)
        )
        return rows[0] if rows else None

    def add_pantry(self, data):
        return self._insert('pantries', PANTRY_COLUMNS, data, deleted=0)

    def delete_pantry(self, pantry_id):
        """Soft-delete a pantry. Returns False if there was nothing to delete."""
        with self.connect() as conn:
            cur = conn.execute(
                'UPDATE pantries SET deleted = 1 WHERE id = ? AND deleted = 0',
                (pantry_id,),
            )
            return cur.rowcount > 0

    def seed_pantries(self, rows):
        """Insert many pantries at once; returns how many were written."""
        params = [
            tuple(row.get(col) for col in PANTRY_COLUMNS) for row in rows
        ]
        if not params:
            return 0
        marks = ', '.join('?' for _ in PANTRY_COLUMNS)
        with self.connect() as conn:
            conn.executemany(
                f'INSERT INTO pantries ({", ".join(PANTRY_COLUMNS)}, deleted) '
                f'VALUES ({marks}, 0)',
                params,
            )
        return len(params)

    def pantries_missing_coords(self):
        return self._select(
            'SELECT * FROM pantries WHERE deleted = 0 '
            'AND (lat IS NULL OR lng IS NULL) ORDER BY id'
        )

    def update_coords(self, updates):
        """Apply ``(lat, lng, pantry_id)`` triples."""
        with self.connect() as conn:
            conn.executemany(
                'UPDATE pantries SET lat = ?, lng = ? WHERE id = ?', list(updates)
            )

    # politicians and candidates

    def list_politicians(self):
        return self._select('SELECT * FROM politicians ORDER BY id')

    def add_politician(self, data):
        return self._insert('politicians', POLITICIAN_COLUMNS, data)

    def list_candidates(self, only_on_map=True):
        if only_on_map:
            return self._select(
                'SELECT * FROM candidates WHERE show_on_map = 1 ORDER BY id'
            )
        return self._select('SELECT * FROM candidates ORDER BY id')

    def add_candidate(self, data):
        return self._insert('candidates', CANDIDATE_COLUMNS, data)

    def summary(self):
        """Table names, row counts and pantries lacking coordinates."""
        with self.connect() as conn:
            tables = [
                r[0] for r in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' "
                    "AND name NOT LIKE 'sqlite_%' ORDER BY name"
                ).fetchall()
            ]
            info = {'path': self.path, 'tables': tables}
            for table in TABLES:
                if table in tables:
                    info[f'{table}_count'] = conn.execute(
                        f'SELECT count(*) FROM {table}'
                    ).fetchone()[0]
        if 'pantries' in tables:
            info['pantries_missing_coords'] = len(self.pantries_missing_coords())
        return info
