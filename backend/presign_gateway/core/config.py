from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ShareOutputMode = Literal["share_line", "url_pattern", "share_line_with_fallback"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    debug: bool = Field(default=False, alias="DEBUG")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Shared secret for every route except /health. Empty means deny all.
    api_token: str = Field(default="", alias="API_TOKEN")

    minio_alias: str = Field(default="myminio", alias="MINIO_ALIAS")
    public_base_url: str = Field(default="", alias="PUBLIC_MINIO_BASE_URL")

    mc_binary: str = Field(default="mc", alias="MC_BINARY")
    mc_timeout_seconds: float = Field(default=15.0, gt=0, alias="MC_TIMEOUT_SECONDS")
    share_output_mode: ShareOutputMode = Field(default="share_line", alias="SHARE_OUTPUT_MODE")

    # Optional alias bootstrap, run once at startup when all three are set.
    minio_endpoint: str = Field(default="", alias="MINIO_ENDPOINT")
    minio_access_key: str = Field(default="", alias="MINIO_ACCESS_KEY")
    minio_secret_key: str = Field(default="", alias="MINIO_SECRET_KEY")

    @model_validator(mode="before")
    @classmethod
    def _strip_values(cls, data: Any) -> Any:
        """Trim string values; whitespace-only ones are dropped so the default applies."""
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for name, value in data.items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            cleaned[name] = value
        return cleaned

    @property
    def alias_bootstrap_enabled(self) -> bool:
        return bool(self.minio_endpoint and self.minio_access_key and self.minio_secret_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
