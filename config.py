from __future__ import annotations

import logging
import math
import os
import yaml
from pathlib import Path
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

# Project root (parent of this file)
BASE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = Path(os.environ.get("RENTAL_ROI_CONFIG", BASE_DIR / "config.yaml"))

_FALLBACKS: Dict[str, Any] = {
    "price": 260_000,
    "renovation_cost": 17_000,
    "management_fee": 2_639,
    "property_tax": 3_022,
    "monthly_rent": 1_700,
    "discount_rate_percent": 2,
    "horizon_years": 30,
    "default_theme": "dark",
    "storage_path": ".rental_roi_state.json",
    "log_level": "INFO",
}


def _load_yaml(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def _setting(cfg: Dict[str, Any], key: str, cast: Callable[[Any], Any]) -> Any:
    """``cast(cfg[key])``, or the built-in value when missing or malformed."""
    try:
        value = cast(cfg.get(key, _FALLBACKS[key]))
    except (TypeError, ValueError):
        logger.warning(f"Invalid {key!r} in config: {cfg.get(key)!r}, using {_FALLBACKS[key]!r}")
        return cast(_FALLBACKS[key])
    if isinstance(value, float) and not math.isfinite(value):
        return cast(_FALLBACKS[key])
    return value


def _resolve_path(raw: Any) -> Path:
    path = Path(raw).expanduser()
    return path if path.is_absolute() else BASE_DIR / path


CFG = _load_yaml()

# Input defaults
PRICE: float = _setting(CFG, "price", float)
RENOVATION_COST: float = _setting(CFG, "renovation_cost", float)
MANAGEMENT_FEE: float = _setting(CFG, "management_fee", float)
PROPERTY_TAX: float = _setting(CFG, "property_tax", float)
MONTHLY_RENT: float = _setting(CFG, "monthly_rent", float)
DISCOUNT_RATE_PERCENT: float = _setting(CFG, "discount_rate_percent", float)
HORIZON_YEARS: int = max(1, _setting(CFG, "horizon_years", int))

# Page
DEFAULT_THEME: str = _setting(CFG, "default_theme", str)
STORAGE_PATH: Path = _setting(CFG, "storage_path", _resolve_path)
LOG_LEVEL: str = _setting(CFG, "log_level", str).upper()
