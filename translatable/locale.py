"""
Current-locale resolution

Pure helpers that pick the active locale for a request from the explicit
``X-Language`` header, the ``Accept-Language`` header or the configured
default, in that order.
"""

from __future__ import annotations

from collections.abc import Sequence

from translatable.config import LocaleConfig


def _weighted_tags(header: str) -> list[tuple[float, str]]:
    tags: list[tuple[float, str]] = []
    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        if not tag:
            continue
        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 1.0
        tags.append((quality, tag.strip()))
    # Stable sort keeps header order for equal quality
    tags.sort(key=lambda item: item[0], reverse=True)
    return tags


def parse_accept_language(header: str, supported: Sequence[str]) -> str | None:
    """Return the best supported locale for an Accept-Language header.

    Tags are tried by descending q-value, first as an exact (case-insensitive)
    match and then by base language, so "fr-CA" matches a supported "fr".
    Tags with q=0 are ignored.
    """
    if not header:
        return None

    by_lower = {locale.lower(): locale for locale in supported}
    for quality, tag in _weighted_tags(header):
        if quality <= 0:
            continue
        tag = tag.lower()
        if tag in by_lower:
            return by_lower[tag]
        base = tag.split("-")[0]
        if base in by_lower:
            return by_lower[base]
    return None


def resolve_locale(explicit: str | None, accept_language: str | None, config: LocaleConfig) -> str:
    supported = config.get_locales()
    explicit = (explicit or "").strip()
    if explicit in supported:
        return explicit
    return parse_accept_language(accept_language or "", supported) or config.default_locale
