"""Initial schema: remembered comparison locations."""

import sqlite3

DDL = [
    # Last location query entered for each comparison slot
    """
    CREATE TABLE IF NOT EXISTS session_locations (
        slot_index INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        lat REAL,
        lon REAL,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
