\
from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any, Dict
import json

from .errors import AppError, CONFIGURATION_ERROR
from .models import SheetConfig


_FIELD_NAMES = frozenset(f.name for f in fields(SheetConfig))


# ---------- Serialization ----------

def config_to_dict(cfg: SheetConfig) -> Dict[str, Any]:
    return asdict(cfg)


def config_from_dict(data: Dict[str, Any]) -> SheetConfig:
    """
    Build a validated SheetConfig. Missing keys take their defaults;
    unknown keys are rejected so typos never pass silently.
    """
    if not isinstance(data, dict):
        raise AppError(CONFIGURATION_ERROR, f"Config must be a JSON object (got {type(data).__name__})")

    unknown = sorted(set(data) - _FIELD_NAMES)
    if unknown:
        raise AppError(
            CONFIGURATION_ERROR,
            f"Unknown config key(s): {', '.join(unknown)}",
            {"unknown": unknown},
        )
    return SheetConfig(**data)


# ---------- File IO ----------

def save_config_json(cfg: SheetConfig, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_dict(cfg), f, indent=2)


def load_config_json(path: str) -> SheetConfig:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise AppError(CONFIGURATION_ERROR, f"Config is not valid JSON: {e}", {"path": path})
    return config_from_dict(data)
