"""Configuration for dalgen: YAML defaults and environment settings."""

from .loader import find_config_file, get_config, load_config
from .settings import Settings, get_settings

__all__ = ["Settings", "find_config_file", "get_config", "get_settings", "load_config"]
