"""Configuration helpers."""

from rabbitmq_tools.utils.config import ManagementConfig, Settings, get_settings, load_config

__all__ = ["ManagementConfig", "Settings", "get_settings", "load_config"]
