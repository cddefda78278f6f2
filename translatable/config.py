from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from translatable.exceptions import LocalesNotDefinedError

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "translatable"
    app_version: str = "0.3.0"
    debug: bool = False

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./translatable.db"

    # Locale settings
    locales: list[str] = ["en", "fr", "de", "es"]
    default_locale: str = "en"
    fallback_locales: dict[str, list[str]] = {"fr": ["en"], "de": ["en"], "es": ["en"]}
    use_fallback: bool = False
    always_fillable: bool = False

    # Naming conventions
    locale_key: str = "locale"
    translation_suffix: str = "Translation"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()


class LocaleConfig(BaseModel):
    """Locale configuration handed explicitly to every resolver.

    Built once from :class:`Settings` (or directly in tests), it carries the
    supported locales, the ordered fallback chains and the default flags.
    Nothing in the resolver reads process-wide state.
    """

    model_config = ConfigDict(frozen=True)

    locales: tuple[str, ...] = ()
    default_locale: str = "en"
    fallback_locales: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    use_fallback: bool = False
    always_fillable: bool = False
    locale_key: str = "locale"
    translation_suffix: str = "Translation"

    @classmethod
    def from_settings(cls, source: Settings) -> "LocaleConfig":
        return cls(
            locales=tuple(source.locales),
            default_locale=source.default_locale,
            fallback_locales={k: tuple(v) for k, v in source.fallback_locales.items()},
            use_fallback=source.use_fallback,
            always_fillable=source.always_fillable,
            locale_key=source.locale_key,
            translation_suffix=source.translation_suffix,
        )

    def get_locales(self) -> tuple[str, ...]:
        """Return the supported locales, failing fast when none are configured."""
        if not self.locales:
            raise LocalesNotDefinedError()
        return self.locales

    def is_locale(self, key: str) -> bool:
        return key in self.get_locales()

    def fallback_chain(self, locale: str) -> tuple[str, ...]:
        """Ordered fallback locales for ``locale``.

        A locale without a registered chain has no fallback available.
        """
        return self.fallback_locales.get(locale, ())


@lru_cache
def get_locale_config() -> LocaleConfig:
    return LocaleConfig.from_settings(settings)
