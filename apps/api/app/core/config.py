from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

API_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE = API_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = Field(default="development", alias="APP_ENV")
    port: int = Field(default=3000, alias="PORT")

    # Site content
    public_dir: Path = Field(default=API_ROOT / "public", alias="PUBLIC_DIR")
    assets_dir: Path = Field(default=API_ROOT / "assets", alias="ASSETS_DIR")
    # Defaults to <assets_dir>/translations/translations.json when unset.
    translations_file: Path | None = Field(default=None, alias="TRANSLATIONS_FILE")
    default_language: str = Field(default="pt", alias="DEFAULT_LANGUAGE")

    # Asaas
    # Optional: pages and translations work without billing configured.
    asaas_api_url: str | None = Field(default=None, alias="ASAAS_API_URL")
    asaas_access_token: str | None = Field(default=None, alias="ASAAS_ACCESS_TOKEN")
    subscription_value: float | None = Field(default=None, alias="SUBSCRIPTION_VALUE")

    # MongoDB (checkout image)
    mongodb_uri: str | None = Field(default=None, alias="MONGODB_URI")
    mongodb_db_name: str = Field(default="landing", alias="MONGODB_DB_NAME")
    mongodb_collection: str = Field(default="img", alias="COLLECTION")
    checkout_image_id: str = Field(
        default="6972cf0ba5a0dda7d59692cc", alias="CHECKOUT_IMAGE_ID"
    )

    # Observability
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")
    sentry_traces_sample_rate: float = Field(
        default=0.0, alias="SENTRY_TRACES_SAMPLE_RATE"
    )

    @model_validator(mode="after")
    def validate_runtime_constraints(self) -> "Settings":
        if not (0.0 <= self.sentry_traces_sample_rate <= 1.0):
            raise ValueError("SENTRY_TRACES_SAMPLE_RATE must be 0..1")
        if not (self.default_language or "").strip():
            raise ValueError("DEFAULT_LANGUAGE must not be empty")
        return self

    def resolved_translations_file(self) -> Path:
        if self.translations_file is not None:
            return self.translations_file
        return self.assets_dir / "translations" / "translations.json"

    def is_checkout_configured(self) -> bool:
        return bool(
            (self.asaas_api_url or "").strip()
            and (self.asaas_access_token or "").strip()
        )


settings = Settings()  # type: ignore[call-arg]  # singleton import via env settings
