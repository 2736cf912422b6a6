"""Read the registry's YAML settings file into an AppConfig."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from user_registry.config.models import AppConfig


def load_config(path: str | Path) -> AppConfig:
    """
    Parse the store, form, list_view and messages sections of a registry config.
    Omitted sections fall back to their defaults (in-memory store, 1 s reset delay,
    last_name ascending). A missing file raises FileNotFoundError, broken YAML
    raises yaml.YAMLError, and an empty, non-mapping or out-of-range file raises
    ValueError.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        raise ValueError("Config file is empty")
    if not isinstance(data, dict):
        raise ValueError("Invalid config: top level must be a mapping")

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config: {e}") from e
