from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from storefront.client.app.localization import (
    InMemoryPreferenceStore,
    SQLitePreferenceStore,
    build_preference_store,
)
from storefront.client.config.schema import ClientSettings


def test_in_memory_store_round_trip() -> None:
    store = InMemoryPreferenceStore()
    assert store.load() is None

    store.save("km")

    assert store.load() == "km"


def test_sqlite_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "prefs.sqlite3"
    SQLitePreferenceStore(path).save("zh")

    # A fresh store instance should read the persisted value.
    assert SQLitePreferenceStore(path).load() == "zh"


def test_sqlite_store_overwrites_single_slot(tmp_path: Path) -> None:
    store = SQLitePreferenceStore(tmp_path / "prefs.sqlite3")
    store.save("km")
    store.save("en")

    assert store.load() == "en"


def test_sqlite_store_keys_are_isolated(tmp_path: Path) -> None:
    path = tmp_path / "prefs.sqlite3"
    SQLitePreferenceStore(path, key="kiosk-language").save("km")

    assert SQLitePreferenceStore(path).load() is None


def test_sqlite_store_handles_concurrent_writers(tmp_path: Path) -> None:
    store = SQLitePreferenceStore(tmp_path / "prefs.sqlite3")

    with ThreadPoolExecutor(max_workers=4) as executor:
        list(executor.map(store.save, ["en", "km", "zh", "km"] * 5))

    assert store.load() in {"en", "km", "zh"}


def test_build_preference_store_follows_settings(tmp_path: Path) -> None:
    durable = build_preference_store(
        ClientSettings(preference_path=tmp_path / "prefs.sqlite3", language_storage_key="lang")
    )
    ephemeral = build_preference_store(ClientSettings())

    assert isinstance(durable, SQLitePreferenceStore)
    assert isinstance(ephemeral, InMemoryPreferenceStore)
