from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any

from .config import PundThresholds

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "pund_settings.json"


def default_settings_path() -> Path:
    # project root, resolved per call
    return Path(__file__).resolve().parents[1] / SETTINGS_FILENAME


def _coerce(default: Any, value: Any) -> Any:
    """Return ``value`` as the type of ``default``; raise ValueError if it is not one.

    JSON booleans are not numbers here, and floats only fill int fields when
    they are integral.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    elif isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    raise ValueError(f"expected {type(default).__name__}")


def load_thresholds(config_path: Path | None = None) -> PundThresholds:
    """Load analysis thresholds from JSON, falling back to defaults.

    Unknown keys are ignored so that settings files written by newer versions
    still load. Values of the wrong type keep their default.
    """
    base = PundThresholds()
    config_path = Path(config_path) if config_path is not None else default_settings_path()
    if not config_path.exists():
        return base
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(f"Could not read thresholds from {config_path}: {exc}; using defaults")
        return base
    if not isinstance(data, dict):
        logger.warning(f"Thresholds file {config_path} does not hold an object; using defaults")
        return base

    # Only allow keys that exist in PundThresholds
    defaults = {f.name: getattr(base, f.name) for f in fields(base)}
    filtered: dict[str, Any] = {}
    for key, value in data.items():
        if key not in defaults:
            logger.debug(f"Ignoring unknown threshold '{key}'")
            continue
        try:
            filtered[key] = _coerce(defaults[key], value)
        except ValueError:
            logger.warning(f"Invalid value for '{key}': {value!r}; keeping default")

    return replace(base, **filtered)


def save_thresholds(thresholds: PundThresholds, config_path: Path | None = None) -> Path:
    config_path = Path(config_path) if config_path is not None else default_settings_path()
    with config_path.open("w", encoding="utf-8") as f:
        json.dump(asdict(thresholds), f, indent=2)
    return config_path
