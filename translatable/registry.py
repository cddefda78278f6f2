"""
Translatable model registry

Holds one TranslatableOptions per primary model: which attributes are
translated, which model stores them, and the naming conventions (foreign key,
locale column, collection name) used to reach the translation rows.

Registration is usually done with the ``translatable`` class decorator:

    @translatable(translated_attributes=["title", "body"])
    class Content(Base):
        ...
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from translatable.config import LocaleConfig, get_locale_config
from translatable.exceptions import ModelNotTranslatableError, TranslatableConfigError
from translatable.fields import FieldKind, build_field_map, column_names

logger = logging.getLogger(__name__)

_registry: dict[type, TranslatableOptions] = {}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(eq=False)
class TranslatableOptions:
    """Per-model translation settings.

    ``translation_model`` may be given as a class or as a class name; names are
    resolved against the declarative registry on first use, so the translation
    model can be declared after the primary one.
    """

    model: type
    translation_model: type | str
    translated_attributes: tuple[str, ...]
    relation_key: str
    locale_key: str
    relationship: str = "translations"
    use_fallback: bool | None = None
    fillable: frozenset[str] = frozenset()
    guarded: frozenset[str] = frozenset({"*"})

    @cached_property
    def translation_class(self) -> type:
        if isinstance(self.translation_model, type):
            return self.translation_model
        for mapper in self.model.registry.mappers:
            if mapper.class_.__name__ == self.translation_model:
                return mapper.class_
        raise TranslatableConfigError(
            f"Translation model '{self.translation_model}' for {self.model.__name__} is not mapped",
            details={"model": self.model.__name__, "translation_model": self.translation_model},
        )

    @cached_property
    def fields(self) -> Mapping[str, FieldKind]:
        return build_field_map(self.model, self.translation_class, self.translated_attributes)

    @cached_property
    def base_columns(self) -> tuple[str, ...]:
        return tuple(column_names(self.model))

    def is_translated(self, key: str) -> bool:
        return self.fields.get(key) is FieldKind.TRANSLATED


def register_translatable(
    model: type,
    *,
    translated_attributes: Iterable[str],
    translation_model: type | str | None = None,
    relation_key: str | None = None,
    locale_key: str | None = None,
    relationship: str = "translations",
    use_fallback: bool | None = None,
    fillable: Iterable[str] = (),
    guarded: Iterable[str] = ("*",),
    config: LocaleConfig | None = None,
) -> TranslatableOptions:
    """Register ``model`` as translatable and return its options.

    Unset naming conventions are derived from ``config``: the translation model
    is ``<Model><translation_suffix>``, the foreign key ``<snake_model>_id``
    and the locale column ``config.locale_key``.
    """
    config = config or get_locale_config()
    options = TranslatableOptions(
        model=model,
        translation_model=translation_model or f"{model.__name__}{config.translation_suffix}",
        translated_attributes=tuple(translated_attributes),
        relation_key=relation_key or f"{snake_case(model.__name__)}_id",
        locale_key=locale_key or config.locale_key,
        relationship=relationship,
        use_fallback=use_fallback,
        fillable=frozenset(fillable),
        guarded=frozenset(guarded),
    )
    _registry[model] = options
    logger.info(
        "Registered translatable model %s (attributes=%s)",
        model.__name__,
        ", ".join(options.translated_attributes),
    )
    return options


def translatable(**kwargs: Any) -> Callable[[type], type]:
    """Class decorator form of :func:`register_translatable`."""

    def decorator(model: type) -> type:
        register_translatable(model, **kwargs)
        return model

    return decorator


def get_options(model_or_instance: Any) -> TranslatableOptions:
    model = model_or_instance if isinstance(model_or_instance, type) else type(model_or_instance)
    for klass in model.__mro__:
        if klass in _registry:
            return _registry[klass]
    raise ModelNotTranslatableError(model.__name__)


def is_totally_guarded(options: TranslatableOptions) -> bool:
    return not options.fillable and options.guarded == frozenset({"*"})


def is_fillable(options: TranslatableOptions, key: str) -> bool:
    if key in options.fillable:
        return True
    if key in options.guarded or options.guarded == frozenset({"*"}):
        return False
    return not options.fillable and not key.startswith("_")
