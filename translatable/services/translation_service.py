"""
Translation Service

Async helpers that load, save and prune translatable entities on an
AsyncSession.

Functions:
    load_translatable   — fetch one entity by primary key, wrapped
    list_translatable   — fetch many entities, wrapped
    save_translatable   — save entity + dirty translations, commit on success
    delete_translation  — remove one locale's translation
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from translatable.config import LocaleConfig, get_locale_config
from translatable.resolver import Translatable
from translatable.scopes import with_translation
from translatable.store import SQLAlchemyRecordStore

logger = logging.getLogger(__name__)


async def load_translatable(
    model: type,
    entity_id: Any,
    db: AsyncSession,
    *,
    locale: str | None = None,
    config: LocaleConfig | None = None,
    with_fallback: bool | None = None,
) -> Translatable | None:
    """Fetch an entity by primary key with all its translations. Returns None if not found."""
    config = config or get_locale_config()
    primary_key = inspect(model).primary_key[0]
    result = await db.execute(select(model).where(primary_key == entity_id))
    entity = result.scalars().first()
    if entity is None:
        return None
    return Translatable(entity, config, locale, use_fallback=with_fallback)


async def list_translatable(
    model: type,
    db: AsyncSession,
    *,
    locale: str | None = None,
    config: LocaleConfig | None = None,
    stmt: Select | None = None,
    only_locale: bool = False,
) -> list[Translatable]:
    """Return wrapped entities for ``stmt`` (default: every row of ``model``).

    With ``only_locale`` the translations are restricted to the locale and its
    fallback chain via the ``with_translation`` scope.
    """
    config = config or get_locale_config()
    stmt = stmt if stmt is not None else select(model)
    if only_locale:
        stmt = with_translation(stmt, model, config, locale).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return [Translatable(entity, config, locale) for entity in result.scalars().unique().all()]


async def save_translatable(translatable: Translatable, db: AsyncSession) -> bool:
    """Save the entity and its dirty translations, then commit.

    Each write runs in its own savepoint. On failure nothing is committed and
    False is returned; the failed write is already rolled back and the caller
    decides whether to commit or roll back what was written before it.
    """
    store = SQLAlchemyRecordStore(db)
    entity = translatable.entity
    if not await translatable.save(store):
        logger.warning("Save failed: %s", type(entity).__name__)
        return False

    entity_id = store.identity(entity)
    locales = translatable.locales()
    await db.commit()
    logger.info("Saved %s id=%s locales=%s", type(entity).__name__, entity_id, ",".join(locales))
    return True


async def delete_translation(translatable: Translatable, locale: str, db: AsyncSession) -> bool:
    """Remove the translation for ``locale`` from the entity and commit.

    Returns True if a translation was deleted, False if none existed. An
    unsaved draft is only dropped from the resolver.
    """
    translation = translatable.get_translation(locale, False)
    if translation is None:
        return False

    if translatable.remove_translation(translation):
        if inspect(translation).has_identity:
            await db.delete(translation)
        await db.commit()
    logger.info("Translation deleted: %s locale=%s", type(translatable.entity).__name__, locale)
    return True
