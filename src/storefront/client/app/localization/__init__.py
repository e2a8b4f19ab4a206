"""Language selection, bundled translation tables and preference storage."""

from .catalog import (
    BASE_LOCALE,
    available_locales,
    load_fallback_translations,
    lookup,
    normalise_locale,
)
from .manager import (
    DEFAULT_LANGUAGES,
    LocalizationManager,
    LocalizationState,
    UnsupportedLanguageError,
)
from .preferences import (
    InMemoryPreferenceStore,
    PreferenceStore,
    SQLitePreferenceStore,
    build_preference_store,
)

__all__ = [
    "BASE_LOCALE",
    "DEFAULT_LANGUAGES",
    "InMemoryPreferenceStore",
    "LocalizationManager",
    "LocalizationState",
    "PreferenceStore",
    "SQLitePreferenceStore",
    "UnsupportedLanguageError",
    "available_locales",
    "build_preference_store",
    "load_fallback_translations",
    "lookup",
    "normalise_locale",
]
