from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional


@dataclass
class InputSet:
    # Purchase
    price: float = 260_000.0
    renovation_cost: float = 17_000.0

    # Recurring (annual costs, monthly rent)
    management_fee: float = 2_639.0
    property_tax: float = 3_022.0
    monthly_rent: float = 1_700.0

    # Discounting
    discount_rate_percent: float = 2.0
    horizon_years: int = 30

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULTS = InputSet()

FIELD_NAMES = tuple(f.name for f in fields(InputSet))
NPV_FIELDS = ("discount_rate_percent", "horizon_years")


def read_value(raw: Any, fallback: float) -> float:
    """Parse a number, returning ``fallback`` for anything invalid or non-finite."""
    if isinstance(raw, bool) or raw is None:
        return fallback
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return fallback
    return value if math.isfinite(value) else fallback


def read_inputs(raw: Mapping[str, Any], defaults: Optional[InputSet] = None) -> InputSet:
    """Coerce a mapping of raw field values into an InputSet.

    Missing or invalid fields take the default for that field. The horizon is
    floored to a whole number of years, minimum 1. Unknown keys are ignored.
    """
    base = defaults if defaults is not None else DEFAULTS
    values: Dict[str, Any] = {}
    for name in FIELD_NAMES:
        values[name] = read_value(raw.get(name), getattr(base, name))
    values["horizon_years"] = max(1, int(math.floor(values["horizon_years"])))
    return InputSet(**values)


def validate_inputs(inputs: InputSet) -> Dict[str, str]:
    """Field-level messages for the form, empty string when the field is fine.

    Messages are advisory only: the values are still used for the calculation.
    """
    discount = inputs.discount_rate_percent
    return {
        "price": "Price must be positive" if inputs.price <= 0 else "",
        "renovation_cost": "Renovation must be non-negative" if inputs.renovation_cost < 0 else "",
        "management_fee": "Management fee must be non-negative" if inputs.management_fee < 0 else "",
        "property_tax": "Property tax must be non-negative" if inputs.property_tax < 0 else "",
        "monthly_rent": "Rent must be non-negative" if inputs.monthly_rent < 0 else "",
        "discount_rate_percent": "Discount rate seems unusual" if (discount < -99 or discount > 1000) else "",
        "horizon_years": "Years must be at least 1" if inputs.horizon_years <= 0 else "",
    }


def has_errors(messages: Mapping[str, str]) -> bool:
    return any(messages.values())
