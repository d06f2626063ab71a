from __future__ import annotations

import json
import os
from typing import Any, Tuple

from schema import FieldType

BASE_DIR = os.path.dirname(__file__)
BASE_PRESETS_PATH = os.path.join(BASE_DIR, "presets.json")
LOCAL_PRESETS_PATH = os.environ.get(
    "PRESETS_OVERRIDE_PATH",
    os.path.join(BASE_DIR, "presets.local.json"),
)


def _load_json(path: str, *, required: bool = False) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        if required:
            raise
        return {}
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON in {path}: {exc}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = base.copy()
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


PRESETS_BASE = _load_json(BASE_PRESETS_PATH, required=True)
PRESETS_OVERRIDE = _load_json(LOCAL_PRESETS_PATH)
PRESETS = _deep_merge(PRESETS_BASE, PRESETS_OVERRIDE)
DEFAULTS = PRESETS["defaults"]


def _field_types_from_defaults() -> Tuple[FieldType, ...]:
    mapping = DEFAULTS.get("field_types", {})
    if not isinstance(mapping, dict):
        raise RuntimeError("field_types in presets must be an object of code -> label.")
    return tuple(FieldType(str(code), str(label)) for code, label in mapping.items())


CONFIG_CSV_PATH = os.environ.get("CONFIG_CSV_PATH", DEFAULTS["config_path"])
DOWNLOAD_NAME = DEFAULTS.get("download_name", "config.csv")
FIELD_TYPES = _field_types_from_defaults()
