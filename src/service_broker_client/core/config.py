from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Resolve project root (repo root) relative to this file.
ROOT_DIR = Path(__file__).resolve().parents[3]
ENV_PATH = ROOT_DIR / ".env"


class ServiceBrokerConfig(BaseModel):
    url: Optional[str] = None
    auth_token: Optional[str] = None
    timeout: float = 60.0
    connect_timeout: float = 5.0

    model_config = {"frozen": True}

    def is_configured(self) -> bool:
        return bool(self.url and self.auth_token)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            parsed = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Invalid service broker url: {value!r}") from exc
        if parsed.scheme not in {"http", "https"} or not parsed.host:
            raise ValueError(f"Service broker url must be an absolute http(s) url: {value!r}")
        if parsed.userinfo:
            # Stored url is rendered into errors and logs; the token is added per request.
            raise ValueError("Service broker url must not contain credentials")
        if parsed.query or parsed.fragment:
            raise ValueError(f"Service broker url must not have a query or fragment: {value!r}")
        return value.rstrip("/")


class Settings(BaseModel):
    broker: ServiceBrokerConfig = Field(default_factory=ServiceBrokerConfig)
    log_level: str = "WARNING"

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(dotenv_path=ENV_PATH, override=False)

    def _to_float(env_value: str | None, default: float) -> float:
        if env_value is None:
            return default
        try:
            return float(env_value)
        except ValueError:
            return default

    defaults = ServiceBrokerConfig()
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
        broker=ServiceBrokerConfig(
            url=os.getenv("SERVICE_BROKER_URL"),
            auth_token=os.getenv("SERVICE_BROKER_AUTH_TOKEN"),
            timeout=_to_float(os.getenv("SERVICE_BROKER_TIMEOUT"), defaults.timeout),
            connect_timeout=_to_float(
                os.getenv("SERVICE_BROKER_CONNECT_TIMEOUT"), defaults.connect_timeout
            ),
        ),
    )
