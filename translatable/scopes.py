"""
Query scopes for translatable models

Each scope takes a ``Select`` over a registered model and returns a new one,
so they compose:

    stmt = translated_in(select(Content), Content, "fr", "title")
    stmt = with_translation(stmt, Content, config, locale="fr")
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, and_, inspect
from sqlalchemy.orm import aliased, selectinload

from translatable.config import LocaleConfig
from translatable.registry import get_options


def _translation_column(model: type, key: str) -> Any:
    return getattr(get_options(model).translation_class, key)


def _relation(model: type) -> Any:
    return getattr(model, get_options(model).relationship)


def with_translation(
    stmt: Select,
    model: type,
    config: LocaleConfig,
    locale: str | None = None,
    with_fallback: bool | None = None,
) -> Select:
    """Eager-load only the translations for ``locale`` (plus its fallback chain)."""
    options = get_options(model)
    locale = locale or config.default_locale
    if with_fallback is None:
        with_fallback = config.use_fallback if options.use_fallback is None else options.use_fallback

    locales = [locale]
    if with_fallback:
        locales.extend(config.fallback_chain(locale))

    locale_column = _translation_column(model, options.locale_key)
    return stmt.options(selectinload(_relation(model).and_(locale_column.in_(locales))))


def where_translation(stmt: Select, model: type, key: str, value: Any, locale: str | None = None) -> Select:
    criteria = [_translation_column(model, key) == value]
    if locale:
        criteria.append(_translation_column(model, get_options(model).locale_key) == locale)
    return stmt.where(_relation(model).any(and_(*criteria)))


def where_translation_like(stmt: Select, model: type, key: str, value: str, locale: str | None = None) -> Select:
    criteria = [_translation_column(model, key).like(value)]
    if locale:
        criteria.append(_translation_column(model, get_options(model).locale_key).like(locale))
    return stmt.where(_relation(model).any(and_(*criteria)))


def translated_in(stmt: Select, model: type, locale: str, key: str | None = None) -> Select:
    """Entities with a translation in ``locale``; with ``key``, that field must not be the '%' placeholder."""
    criteria = [_translation_column(model, get_options(model).locale_key) == locale]
    if key:
        criteria.append(_translation_column(model, key) != "%")
    return stmt.where(_relation(model).any(and_(*criteria)))


def translated(stmt: Select, model: type) -> Select:
    return stmt.where(_relation(model).any())


def order_by_translation(
    stmt: Select,
    model: type,
    key: str,
    locale: str,
    descending: bool = False,
) -> Select:
    """Order by a translated field in ``locale``; entities without that translation sort as NULL."""
    options = get_options(model)
    translation = aliased(options.translation_class)
    primary_key = inspect(model).primary_key[0]
    stmt = stmt.outerjoin(
        translation,
        and_(
            getattr(translation, options.relation_key) == primary_key,
            getattr(translation, options.locale_key) == locale,
        ),
    )
    column = getattr(translation, key)
    return stmt.order_by(column.desc() if descending else column)
