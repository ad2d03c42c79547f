from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from strava_rewriter.rewrite.types import PageErrorPolicy


class Settings(BaseSettings):
    strava_access_token: str = Field(default="", validation_alias="STRAVA_ACCESS_TOKEN")
    strava_base_url: str = Field(
        default="https://www.strava.com/api/v3",
        validation_alias="STRAVA_BASE_URL",
    )
    # 100 requests every 15 minutes, see https://developers.strava.com/docs/rate-limits/
    strava_rate_limit_interval_seconds: float = Field(
        default=9.0,
        validation_alias="STRAVA_RATE_LIMIT_INTERVAL_SECONDS",
    )
    on_page_error: PageErrorPolicy = Field(default=PageErrorPolicy.STOP, validation_alias="ON_PAGE_ERROR")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("strava_rate_limit_interval_seconds")
    @classmethod
    def validate_interval(cls, value: float) -> float:
        if value < 0:
            raise ValueError("STRAVA_RATE_LIMIT_INTERVAL_SECONDS must be >= 0")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


settings = Settings()
