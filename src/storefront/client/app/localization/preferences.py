"""Durable storage for the visitor's preferred display language."""

from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from threading import Lock
from typing import Protocol

from storefront.client.config.schema import ClientSettings

DEFAULT_STORAGE_KEY = "preferred-language"


class PreferenceStore(Protocol):
    """Single string slot read once at startup and written on every change."""

    def load(self) -> str | None: ...

    def save(self, value: str) -> None: ...


class InMemoryPreferenceStore:
    """Preference slot that lives as long as the object."""

    def __init__(self, initial: str | None = None) -> None:
        self._value = initial
        self._lock = Lock()

    def load(self) -> str | None:
        with self._lock:
            return self._value

    def save(self, value: str) -> None:
        with self._lock:
            self._value = value


class SQLitePreferenceStore:
    """SQLite-backed preference slot that outlives the session."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._path = str(path)
        self._key = key
        self._lock = Lock()
        self._initialise()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._path, check_same_thread=False)

    def _initialise(self) -> None:
        with self._lock, self._connect() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def load(self) -> str | None:
        with self._lock, self._connect() as connection:
            row = connection.execute(
                "SELECT value FROM preferences WHERE key = ?",
                (self._key,),
            ).fetchone()
        return None if row is None else str(row[0])

    def save(self, value: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._lock, self._connect() as connection:
            connection.execute(
                "INSERT INTO preferences (key, value, updated_at) VALUES (?, ?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value,"
                " updated_at = excluded.updated_at",
                (self._key, value, now),
            )


def build_preference_store(settings: ClientSettings) -> PreferenceStore:
    """Return a durable store when a path is configured, in-memory otherwise."""

    if settings.preference_path is not None:
        return SQLitePreferenceStore(
            settings.preference_path,
            key=settings.language_storage_key,
        )
    return InMemoryPreferenceStore()


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "InMemoryPreferenceStore",
    "PreferenceStore",
    "SQLitePreferenceStore",
    "build_preference_store",
]
