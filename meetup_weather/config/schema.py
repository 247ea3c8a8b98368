"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from meetup_weather.schedule.dates import parse_weekday


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = (
        "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
    )
    timeout_seconds: float = Field(default=15.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0.0)
    unit_group: str = "us"  # Fahrenheit, inches, mph
    include: str = "hours"


class SelectionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weekday: str = "friday"
    start_hour: int = Field(default=12, ge=0, le=23)
    end_hour: int = Field(default=17, ge=0, le=23)

    @field_validator("weekday")
    @classmethod
    def _known_weekday(cls, v: str) -> str:
        return parse_weekday(v).name.lower()

    @model_validator(mode="after")
    def _ordered_hours(self) -> "SelectionConfig":
        if self.start_hour >= self.end_hour:
            raise ValueError("start_hour must be before end_hour")
        return self


class LocatorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weekday_fallback: bool = True


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)
    cors_origins: list[str] = ["*"]


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    selection: SelectionConfig = SelectionConfig()
    locator: LocatorConfig = LocatorConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()
