"""Configuration loading and schema."""

from monopub.config.loader import CONFIG_FILENAME, load_config
from monopub.config.schema import MonopubConfig, PublishConfig, RegistryConfig

__all__ = [
    "CONFIG_FILENAME",
    "MonopubConfig",
    "PublishConfig",
    "RegistryConfig",
    "load_config",
]
