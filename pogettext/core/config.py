"""pogettext configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GettextSettings(BaseSettings):
    """Catalog loading configuration settings."""

    LOCALES_DIR: str = Field(default=".", alias="GETTEXT_LOCALES_DIR")
    DEFAULT_DOMAIN: str = Field(default="default", alias="GETTEXT_DEFAULT_DOMAIN")
    STRICT_PARSING: bool = Field(default=False, alias="GETTEXT_STRICT_PARSING")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """pogettext configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    gettext: GettextSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        if "gettext" not in kwargs:
            kwargs["gettext"] = GettextSettings()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
