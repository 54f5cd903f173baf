"""Configuration package for runtime settings and startup validation."""

from .settings import RETURN_JMF_ROUTE_PATH, AppSettings, SettingsLoadError, config_load_settings

__all__ = ["AppSettings", "RETURN_JMF_ROUTE_PATH", "SettingsLoadError", "config_load_settings"]
