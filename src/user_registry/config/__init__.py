"""Configuration loading and validation."""

from user_registry.config.models import (
    AppConfig,
    FormConfig,
    ListViewConfig,
    MessagesConfig,
    StoreConfig,
)
from user_registry.config.loader import load_config

__all__ = [
    "AppConfig",
    "FormConfig",
    "ListViewConfig",
    "MessagesConfig",
    "StoreConfig",
    "load_config",
]
