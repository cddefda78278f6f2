"""
Current-locale provider tests

Test classes:
    TestParseAcceptLanguage — quality ordering and base-language matching
    TestResolveLocale       — header precedence and default
    TestLanguageMiddleware  — request.state.locale and locale_config through a FastAPI app
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from translatable.config import LocaleConfig, get_locale_config
from translatable.exceptions import LocalesNotDefinedError
from translatable.locale import parse_accept_language, resolve_locale
from translatable.middleware import LanguageMiddleware, get_request_locale, get_request_locale_config


class TestParseAcceptLanguage:
    def test_exact_match(self):
        assert parse_accept_language("fr", ["en", "fr", "de"]) == "fr"

    def test_quality_ordering(self):
        assert parse_accept_language("de;q=0.9,fr;q=0.8,en;q=0.7", ["en", "fr", "de"]) == "de"

    def test_base_language_match(self):
        assert parse_accept_language("fr-CA", ["en", "fr"]) == "fr"

    def test_case_insensitive_returns_configured_spelling(self):
        assert parse_accept_language("PT-br", ["en", "pt-BR"]) == "pt-BR"

    def test_zero_quality_is_ignored(self):
        assert parse_accept_language("fr;q=0,en;q=0.5", ["en", "fr"]) == "en"

    def test_invalid_quality_defaults_to_one(self):
        assert parse_accept_language("de;q=0.5,fr;q=abc", ["de", "fr"]) == "fr"

    def test_no_match(self):
        assert parse_accept_language("ja", ["en", "fr"]) is None

    def test_empty_header(self):
        assert parse_accept_language("", ["en", "fr"]) is None


class TestResolveLocale:
    def test_explicit_wins(self, locale_config):
        assert resolve_locale("de", "fr", locale_config) == "de"

    def test_unsupported_explicit_falls_through(self, locale_config):
        assert resolve_locale("ja", "fr-CH,en;q=0.5", locale_config) == "fr"

    def test_default_locale(self, locale_config):
        assert resolve_locale(None, None, locale_config) == "en"

    def test_requires_locales(self):
        with pytest.raises(LocalesNotDefinedError):
            resolve_locale("en", None, LocaleConfig(locales=()))


@pytest.fixture
def client(locale_config) -> TestClient:
    app = FastAPI()
    app.add_middleware(LanguageMiddleware, config=locale_config)

    @app.get("/locale")
    async def read_locale(locale: str = Depends(get_request_locale)):
        return {"locale": locale}

    return TestClient(app)


class TestLanguageMiddleware:
    def test_x_language_header(self, client):
        assert client.get("/locale", headers={"X-Language": "de"}).json() == {"locale": "de"}

    def test_accept_language_header(self, client):
        response = client.get("/locale", headers={"Accept-Language": "es-MX,es;q=0.9"})

        assert response.json() == {"locale": "es"}

    def test_default_when_no_headers(self, client):
        assert client.get("/locale").json() == {"locale": "en"}

    def test_config_is_exposed_to_routes(self, locale_config):
        app = FastAPI()
        app.add_middleware(LanguageMiddleware, config=locale_config)

        @app.get("/config")
        async def read_config(config: LocaleConfig = Depends(get_request_locale_config)):
            return {"locales": list(config.locales), "default": config.default_locale}

        response = TestClient(app).get("/config")

        assert response.json() == {"locales": ["en", "fr", "de", "es"], "default": "en"}

    def test_default_comes_from_middleware_config(self):
        config = LocaleConfig(locales=("fr", "en"), default_locale="fr")
        request = SimpleNamespace(state=SimpleNamespace(locale_config=config))

        assert get_request_locale(request) == "fr"

    def test_without_middleware_uses_global_config(self):
        request = SimpleNamespace(state=SimpleNamespace())

        assert get_request_locale_config(request) is get_locale_config()
        assert get_request_locale(request) == get_locale_config().default_locale
