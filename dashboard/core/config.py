from __future__ import annotations

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    document_api_url: str = Field(
        default="http://localhost:8000",
        validation_alias="DOCUMENT_API_URL",
    )
    agent_manager_api_url: str = Field(
        default="http://localhost:8001",
        validation_alias="AGENT_MANAGER_URL",
    )
    use_mock_data: bool = Field(default=False, validation_alias="USE_MOCK_DATA")
    gateway_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        validation_alias="GATEWAY_TIMEOUT_SECONDS",
    )

    frontend_origins: str = Field(
        default="http://localhost:3000",
        validation_alias="FRONTEND_ORIGINS",
    )
    default_user_id: str = Field(default="test_user", validation_alias="DEFAULT_USER_ID")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @computed_field
    @property
    def frontend_origin_list(self) -> list[str]:
        return _split_csv(self.frontend_origins)


@lru_cache
def get_settings() -> Settings:
    return Settings()
