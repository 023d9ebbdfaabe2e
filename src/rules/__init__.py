"""Configuration for modgraph."""

from rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    ExtractionRules,
    ModGraphConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ExtractionRules",
    "ModGraphConfig",
    "load_config",
]
