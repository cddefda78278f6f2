"""
Field map for translatable models

Each registered model gets a mapping of attribute name to FieldKind, built once
at registration time. Readers and writers dispatch on this map instead of
intercepting attribute access at runtime.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from sqlalchemy import inspect

from translatable.exceptions import TranslatableConfigError


class FieldKind(str, enum.Enum):
    """Where the value of an attribute lives."""

    BASE = "base"
    TRANSLATED = "translated"


def column_names(model: type) -> list[str]:
    """Return the mapped column attribute names of a declarative model."""
    return [attr.key for attr in inspect(model).column_attrs]


def build_field_map(
    model: type,
    translation_model: type,
    translated_attributes: Iterable[str],
) -> Mapping[str, FieldKind]:
    """Build the read-only field map for ``model``.

    Every translated attribute must exist as a column on ``translation_model``.
    A name present on both tables is treated as translated.

    Raises:
        TranslatableConfigError: if a translated attribute has no column on the
            translation model.
    """
    translated = list(translated_attributes)
    translation_columns = set(column_names(translation_model))
    missing = [name for name in translated if name not in translation_columns]
    if missing:
        raise TranslatableConfigError(
            f"{translation_model.__name__} has no column for translated attributes: {', '.join(missing)}",
            details={"model": model.__name__, "missing": missing},
        )

    fields: dict[str, FieldKind] = {name: FieldKind.BASE for name in column_names(model)}
    for name in translated:
        fields[name] = FieldKind.TRANSLATED
    return MappingProxyType(fields)
