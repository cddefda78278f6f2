"""
translatable: per-locale translated fields for SQLAlchemy models

Base columns stay on the primary model; translated columns live on a
translation model with one row per locale. ``Translatable`` resolves which
row to read (with fallback chains) and persists edits to either side.
"""

from .config import LocaleConfig, Settings, get_locale_config, settings
from .exceptions import (
    LocalesNotDefinedError,
    MassAssignmentError,
    ModelNotTranslatableError,
    TranslatableConfigError,
    TranslatableException,
)
from .fields import FieldKind
from .registry import TranslatableOptions, get_options, register_translatable, translatable
from .resolver import Translatable
from .store import RecordStore, SQLAlchemyRecordStore

__all__ = [
    "FieldKind",
    "LocaleConfig",
    "LocalesNotDefinedError",
    "MassAssignmentError",
    "ModelNotTranslatableError",
    "RecordStore",
    "SQLAlchemyRecordStore",
    "Settings",
    "Translatable",
    "TranslatableConfigError",
    "TranslatableException",
    "TranslatableOptions",
    "get_locale_config",
    "get_options",
    "register_translatable",
    "settings",
    "translatable",
]
