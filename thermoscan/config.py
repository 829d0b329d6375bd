import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Bytes 5..11 of the 0xEC88 manufacturer payload on Govee broadcasts ("ELLI_R").
GOVEE_SENTINEL: Final[str] = "454c4c495f52"


class LogLevel(StrEnum):
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    loki_url: str = Field(validation_alias="LOKI_URL")
    loki_token: str = Field(validation_alias="LOKI_TOKEN")
    loki_stream_value: str = Field(validation_alias="LOKI_STREAM_VALUE")
    loki_stream_label: str = Field(default="house", validation_alias="LOKI_STREAM_LABEL")
    user_agent: str = Field(default="thermoscan/1.0.0", validation_alias="USER_AGENT")

    vendor_sentinel: str = Field(default=GOVEE_SENTINEL, validation_alias="VENDOR_SENTINEL")
    # None selects the platform default adapter
    ble_adapter: str | None = Field(default=None, validation_alias="BLE_ADAPTER")
    # None means no timeout: a stalled sink stalls ingestion
    ship_timeout_secs: float | None = Field(default=None, validation_alias="SHIP_TIMEOUT_SECS")

    log_level: LogLevel = Field(default=LogLevel.INFO, validation_alias="LOG_LEVEL")


ENV_KEYS: Final[tuple[str, ...]] = (
    "LOKI_URL",
    "LOKI_TOKEN",
    "LOKI_STREAM_VALUE",
    "LOKI_STREAM_LABEL",
    "USER_AGENT",
    "VENDOR_SENTINEL",
    "BLE_ADAPTER",
    "SHIP_TIMEOUT_SECS",
    "LOG_LEVEL",
)

REQUIRED_KEYS: Final[tuple[str, ...]] = ("LOKI_URL", "LOKI_TOKEN", "LOKI_STREAM_VALUE")


@dataclass(frozen=True)
class SinkConfig:
    url: str
    token: str
    stream_label: str
    stream_value: str
    user_agent: str
    timeout: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SinkConfig":
        return cls(
            url=settings.loki_url,
            token=settings.loki_token,
            stream_label=settings.loki_stream_label,
            stream_value=settings.loki_stream_value,
            user_agent=settings.user_agent,
            timeout=settings.ship_timeout_secs,
        )


def load_settings() -> Settings:
    # Load .env if present (does nothing if file missing)
    load_dotenv()
    data: dict[str, str] = {}
    for key in ENV_KEYS:
        # Empty values count as unset so optional keys fall back to defaults
        if os.environ.get(key):
            data[key] = os.environ[key]

    if "LOG_LEVEL" in data:
        data["LOG_LEVEL"] = data["LOG_LEVEL"].upper()

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        missing = [k for k in REQUIRED_KEYS if k not in data]
        if missing:
            raise RuntimeError(f"Missing required configuration: {', '.join(missing)}") from e
        raise
