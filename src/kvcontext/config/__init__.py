from .loader import ConfigError, load_config, parse_config
from .models import AppConfig, ExportSettings, JsonSettings, TomlSettings, YamlSettings

# Config exports are intentionally small.
__all__ = [
    "AppConfig",
    "ConfigError",
    "ExportSettings",
    "JsonSettings",
    "TomlSettings",
    "YamlSettings",
    "load_config",
    "parse_config",
]
