"""Configuration loading utilities."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings

from rabbitmq_tools.broker.client import BrokerConfig

_DEFAULTS = BrokerConfig()


class ManagementConfig(BaseModel):
    """Management API connection settings.

    Defaults come from BrokerConfig so they are declared only once.
    """

    management_url: str = _DEFAULTS.management_url
    username: str = _DEFAULTS.username
    password: str = _DEFAULTS.password
    timeout_seconds: float | None = _DEFAULTS.timeout_seconds

    def to_broker_config(self) -> BrokerConfig:
        return BrokerConfig(**{f.name: getattr(self, f.name) for f in fields(BrokerConfig)})


class Settings(BaseSettings, ManagementConfig):
    """Environment-based settings (RABBITMQ_* variables)."""

    log_level: str = "INFO"

    class Config:
        env_prefix = "RABBITMQ_"
        env_file = ".env"
        env_file_encoding = "utf-8"


def load_config(config_path: str | Path) -> ManagementConfig:
    """Load management API configuration from a YAML file.

    The file may either hold the fields at top level or under a
    ``management`` key.
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if "management" in data:
        data = data["management"]

    return ManagementConfig.model_validate(data)


def get_settings() -> Settings:
    """Get environment-based settings."""
    return Settings()
