"""
Language Detection Middleware

Sets request.state.locale_config to its LocaleConfig and request.state.locale
from:
  1. X-Language request header (exact match against configured locales)
  2. Accept-Language header (quality-weighted, best-match)
  3. LocaleConfig.default_locale (fallback)

Route handlers read them back with the ``get_request_locale`` and
``get_request_locale_config`` dependencies and pass both to Translatable
explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from translatable.config import LocaleConfig, get_locale_config
from translatable.locale import resolve_locale

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.responses import Response
    from starlette.types import ASGIApp


class LanguageMiddleware(BaseHTTPMiddleware):
    """Detect the request locale and attach it to request.state.locale."""

    def __init__(self, app: ASGIApp, config: LocaleConfig | None = None):
        super().__init__(app)
        self.config = config or get_locale_config()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.locale_config = self.config
        request.state.locale = resolve_locale(
            request.headers.get("X-Language"),
            request.headers.get("Accept-Language"),
            self.config,
        )
        return await call_next(request)


def get_request_locale_config(request: Request) -> LocaleConfig:
    """FastAPI dependency returning the LocaleConfig LanguageMiddleware was built with."""
    return getattr(request.state, "locale_config", None) or get_locale_config()


def get_request_locale(request: Request) -> str:
    """FastAPI dependency returning the locale chosen by LanguageMiddleware.

    Without the middleware this is the default locale of the same
    LocaleConfig ``get_request_locale_config`` returns.
    """
    return getattr(request.state, "locale", None) or get_request_locale_config(request).default_locale
