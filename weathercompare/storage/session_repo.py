"""Repository for the last-used location of each comparison slot."""

import sqlite3

from weathercompare.models.location import ResolvedLocation


def save_location(
    conn: sqlite3.Connection, index: int, location: ResolvedLocation | str
) -> None:
    """Remember the location shown in a slot."""
    if isinstance(location, ResolvedLocation):
        name, lat, lon = location.name, location.lat, location.lon
    else:
        name, lat, lon = location, None, None
    conn.execute(
        "INSERT INTO session_locations (slot_index, name, lat, lon, updated_at) "
        "VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(slot_index) DO UPDATE SET name = excluded.name, "
        "lat = excluded.lat, lon = excluded.lon, updated_at = CURRENT_TIMESTAMP",
        (index, name, lat, lon),
    )
    conn.commit()


def load_locations(conn: sqlite3.Connection, max_slots: int = 3) -> list[str | None]:
    """Remembered names indexed by slot; None for empty slots."""
    names: list[str | None] = [None] * max_slots
    rows = conn.execute(
        "SELECT slot_index, name FROM session_locations ORDER BY slot_index"
    ).fetchall()
    for row in rows:
        if 0 <= row["slot_index"] < max_slots:
            names[row["slot_index"]] = row["name"]
    return names


def load_restorable(
    conn: sqlite3.Connection, max_slots: int = 3
) -> list[ResolvedLocation | str | None]:
    """Remembered slots, as resolved locations where coordinates were saved.

    Entries saved from a bare name come back as that name so the caller
    can geocode it again.
    """
    entries: list[ResolvedLocation | str | None] = [None] * max_slots
    rows = conn.execute(
        "SELECT slot_index, name, lat, lon FROM session_locations ORDER BY slot_index"
    ).fetchall()
    for row in rows:
        if not 0 <= row["slot_index"] < max_slots:
            continue
        if row["lat"] is not None and row["lon"] is not None:
            entries[row["slot_index"]] = ResolvedLocation(
                name=row["name"], lat=row["lat"], lon=row["lon"]
            )
        else:
            entries[row["slot_index"]] = row["name"]
    return entries


def clear_location(conn: sqlite3.Connection, index: int) -> None:
    conn.execute("DELETE FROM session_locations WHERE slot_index = ?", (index,))
    conn.commit()


def clear_all(conn: sqlite3.Connection) -> None:
    conn.execute("DELETE FROM session_locations")
    conn.commit()
