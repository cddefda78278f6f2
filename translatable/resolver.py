"""
Translation resolver

``Translatable`` wraps a primary entity of a registered model and mediates all
access to its locale-specific fields:

- reads resolve the translation for the current locale, optionally walking the
  configured fallback chain when that locale is missing
- writes to translated attributes land on the current locale's translation,
  which is created in memory on first write and held by the resolver
- ``save`` persists the entity and then every translation with unsaved
  content changes, through a RecordStore

The current locale and the LocaleConfig are passed in explicitly; the resolver
reads no global state.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from translatable.config import LocaleConfig
from translatable.exceptions import MassAssignmentError
from translatable.registry import get_options, is_fillable, is_totally_guarded
from translatable.store import RecordStore

logger = logging.getLogger(__name__)


class Translatable:
    def __init__(
        self,
        entity: Any,
        config: LocaleConfig,
        locale: str | None = None,
        *,
        use_fallback: bool | None = None,
    ):
        self.entity = entity
        self.config = config
        self.options = get_options(entity)
        self.locale = locale or config.default_locale
        if use_fallback is None:
            use_fallback = self.options.use_fallback
        self.use_fallback = config.use_fallback if use_fallback is None else use_fallback
        # Unsaved translations; they join the entity's collection once persisted
        self._drafts: list[Any] = []

    def __repr__(self) -> str:
        return f"<Translatable {type(self.entity).__name__} locale={self.locale!r}>"

    def for_locale(self, locale: str) -> Translatable:
        """Return a resolver on the same entity and drafts for another current locale."""
        resolver = copy.copy(self)
        resolver.locale = locale
        return resolver

    @property
    def translations(self) -> list[Any]:
        """The entity's stored translations followed by this resolver's drafts."""
        return [*getattr(self.entity, self.options.relationship), *self._drafts]

    def locales(self) -> list[str]:
        """Locales that have a translation in the collection, in collection order."""
        return [self._locale_of(translation) for translation in self.translations]

    # ── Resolution ────────────────────────────────────────────────────────────

    def get_translation(self, locale: str | None = None, with_fallback: bool | None = None) -> Any | None:
        """Return the translation for ``locale`` or ``None``.

        With fallback enabled and no exact match, the first locale of the
        fallback chain that has a translation wins. Never creates a record.
        """
        locale = locale or self.locale
        if with_fallback is None:
            with_fallback = self.use_fallback

        translation = self._find(locale)
        if translation is not None or not with_fallback:
            return translation

        for fallback in self.config.fallback_chain(locale):
            translation = self._find(fallback)
            if translation is not None:
                logger.debug("No %s translation, falling back to %s", locale, fallback)
                return translation
        return None

    def translate(self, locale: str | None = None, with_fallback: bool = False) -> Any | None:
        return self.get_translation(locale, with_fallback)

    def translate_or_default(self, locale: str) -> Any | None:
        return self.get_translation(locale, True)

    def translate_or_new(self, locale: str) -> Any:
        return self.get_translation_or_new(locale)

    def get_translation_or_new(self, locale: str) -> Any:
        translation = self.get_translation(locale, False)
        if translation is None:
            translation = self.get_new_translation(locale)
        return translation

    def get_new_translation(self, locale: str) -> Any:
        """Create an unsaved translation tagged with ``locale``.

        The draft is held by the resolver, not by the entity's relationship,
        so nothing writes it until ``save`` finds it dirty.
        """
        translation = self.options.translation_class()
        setattr(translation, self.options.locale_key, locale)
        self._drafts.append(translation)
        return translation

    def has_translation(self, locale: str | None = None) -> bool:
        return self._find(locale or self.locale) is not None

    def remove_translation(self, translation: Any) -> bool:
        """Drop ``translation`` from the drafts or the entity's collection.

        Returns True if it was a stored translation, which the caller still
        has to delete from storage.
        """
        if translation in self._drafts:
            self._drafts.remove(translation)
            return False
        getattr(self.entity, self.options.relationship).remove(translation)
        return True

    # ── Field access ──────────────────────────────────────────────────────────

    def has_attribute(self, key: str) -> bool:
        return self.options.is_translated(key) or hasattr(self.entity, key)

    def get_attribute(self, key: str) -> Any:
        if not self.options.is_translated(key):
            return getattr(self.entity, key)

        translation = self.get_translation()
        if translation is None:
            return None
        value = getattr(translation, key)
        if not value and self.use_fallback:
            return self._fallback_value(key)[1]
        return value

    def get_fallback_safe_attribute(self, key: str) -> Any:
        """Like get_attribute, but values taken from a fallback locale are
        prefixed with ``"(<locale>) "``."""
        if not self.options.is_translated(key):
            return getattr(self.entity, key)

        own = self.get_translation(self.locale, False)
        if (own is None or not getattr(own, key)) and self.use_fallback:
            fallback, value = self._fallback_value(key)
            if fallback is not None:
                return f"({fallback}) {value}"
        return self.get_attribute(key)

    def set_attribute(self, key: str, value: Any) -> None:
        if self.options.is_translated(key):
            setattr(self.get_translation_or_new(self.locale), key, value)
        else:
            setattr(self.entity, key, value)

    def fill(self, attributes: Mapping[str, Any]) -> Any:
        """Mass-assign attributes, routing locale keys to their translations.

        ``{"fr": {"title": "Bonjour"}, "slug": "hello"}`` writes the French
        title and the primary ``slug``. Guarded keys are skipped, or raise
        MassAssignmentError when the model is totally guarded.
        """
        totally_guarded = is_totally_guarded(self.options)
        remaining: dict[str, Any] = {}

        for key, values in attributes.items():
            if not self.config.is_locale(key):
                remaining[key] = values
                continue
            for name, value in values.items():
                if self.config.always_fillable or is_fillable(self.options, name):
                    setattr(self.get_translation_or_new(key), name, value)
                elif totally_guarded:
                    raise MassAssignmentError(key)
                else:
                    logger.warning("Skipping guarded attribute %s for locale %s", name, key)

        for key, value in remaining.items():
            if is_fillable(self.options, key):
                self.set_attribute(key, value)
            elif totally_guarded:
                raise MassAssignmentError(key)
            else:
                logger.warning("Skipping guarded attribute %s", key)

        return self.entity

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entity's columns with the current locale's translated values."""
        data = {name: getattr(self.entity, name) for name in self.options.base_columns}
        translation = self.get_translation(self.locale, False)
        if translation is not None:
            for name in self.options.translated_attributes:
                data[name] = getattr(translation, name)
        return data

    # ── Persistence ───────────────────────────────────────────────────────────

    def is_translation_dirty(self, translation: Any, store: RecordStore) -> bool:
        dirty = store.dirty_fields(translation)
        dirty.pop(self.options.locale_key, None)
        return bool(dirty)

    async def save(self, store: RecordStore) -> bool:
        """Persist the entity, then its dirty translations.

        An already persisted entity without dirty fields is not written again.
        Translations are only written once the entity itself was saved. Not a
        transaction: a failure between the two steps leaves the entity saved.
        """
        # Read the collection before any flush so it is never lazy-loaded mid-save
        translations = self.translations

        if store.is_persisted(self.entity) and not store.dirty_fields(self.entity):
            return await self.save_translations(store, translations)
        if await store.persist(self.entity):
            return await self.save_translations(store, translations)
        logger.warning("Could not save %s; translations not saved", type(self.entity).__name__)
        return False

    async def save_translations(self, store: RecordStore, translations: list[Any] | None = None) -> bool:
        """Persist dirty translations in collection order, stopping at the first failure.

        A persisted draft moves from the resolver into the entity's collection.
        """
        if translations is None:
            translations = self.translations
        saved = True
        for translation in translations:
            if saved and self.is_translation_dirty(translation, store):
                setattr(translation, self.options.relation_key, store.identity(self.entity))
                saved = await store.persist(translation)
                if saved and translation in self._drafts:
                    self._drafts.remove(translation)
                    store.attach(self.entity, self.options.relationship, translation)
        return saved

    # ── Internals ─────────────────────────────────────────────────────────────

    def _locale_of(self, translation: Any) -> str:
        return getattr(translation, self.options.locale_key)

    def _find(self, locale: str) -> Any | None:
        for translation in self.translations:
            if self._locale_of(translation) == locale:
                return translation
        return None

    def _fallback_value(self, key: str) -> tuple[str | None, Any]:
        for fallback in self.config.fallback_chain(self.locale):
            translation = self._find(fallback)
            if translation is not None and getattr(translation, key):
                return fallback, getattr(translation, key)
        return None, None
