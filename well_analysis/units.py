"""Field/SI unit conversion for well-test quantities.

Field units are the baseline. Each quantity category has a single factor such
that ``si_value = field_value * factor``. Temperature is the exception and uses
the affine Fahrenheit/Celsius transform.

Unknown categories are passed through unchanged so that a host can convert a
whole record without first filtering out fields that carry no unit.
"""

import math
from enum import Enum
from typing import Any, Dict, Mapping, Union

from .logging_config import get_logger

logger = get_logger(__name__)

PSI_TO_KPA = 6.894757
STB_TO_M3 = 0.1589873
FT_TO_M = 0.3048
MD_TO_UM2 = 9.869233e-4
CP_TO_MPAS = 1.0
PER_PSI_TO_PER_KPA = 1.0 / PSI_TO_KPA


class UnitSystem(str, Enum):
    """Supported unit systems."""

    FIELD = "field"
    SI = "si"


# category -> (field label, SI label, field-to-SI factor)
UNIT_TABLE: Dict[str, tuple[str, str, float]] = {
    "pressure": ("psi", "kPa", PSI_TO_KPA),
    "rate": ("STB/d", "m³/d", STB_TO_M3),
    "length": ("ft", "m", FT_TO_M),
    "permeability": ("md", "µm²", MD_TO_UM2),
    "viscosity": ("cp", "mPa·s", CP_TO_MPAS),
    "temperature": ("°F", "°C", 1.0),
    "compressibility": ("1/psi", "1/kPa", PER_PSI_TO_PER_KPA),
}

CATEGORIES = tuple(UNIT_TABLE)


def _as_system(system: Union[UnitSystem, str]) -> UnitSystem:
    if isinstance(system, UnitSystem):
        return system
    try:
        return UnitSystem(str(system).lower())
    except ValueError:
        raise ValueError(
            f"Unknown unit system: {system}. Supported: {[s.value for s in UnitSystem]}"
        ) from None


def convert_value(
    value: Any, category: str, target_system: Union[UnitSystem, str]
) -> Any:
    """Convert a scalar into ``target_system``.

    The value is assumed to be expressed in the other system. Unknown
    categories, ``None`` and NaN are returned unchanged.

    Args:
        value: Quantity to convert
        category: One of ``CATEGORIES``
        target_system: UnitSystem or 'field'/'si'

    Returns:
        Converted value

    Example:
        >>> round(convert_value(1000.0, "pressure", "si"), 3)
        6894.757
    """
    system = _as_system(target_system)

    if value is None or (isinstance(value, float) and math.isnan(value)):
        return value

    entry = UNIT_TABLE.get(category)
    if entry is None:
        logger.debug(f"No unit conversion for category '{category}', leaving as is")
        return value

    if category == "temperature":
        if system is UnitSystem.SI:
            return (value - 32.0) / 1.8
        return value * 1.8 + 32.0

    factor = entry[2]
    if system is UnitSystem.SI:
        return value * factor
    return value / factor


def get_unit_label(category: str, system: Union[UnitSystem, str]) -> str:
    """Return the unit label of ``category`` in ``system`` ('' if unknown)."""
    entry = UNIT_TABLE.get(category)
    if entry is None:
        return ""
    return entry[1] if _as_system(system) is UnitSystem.SI else entry[0]


def unit_labels(system: Union[UnitSystem, str]) -> Dict[str, str]:
    """Return ``{category: label}`` for every known category."""
    return {category: get_unit_label(category, system) for category in CATEGORIES}


def convert_record(
    record: Mapping[str, Any],
    categories: Mapping[str, str],
    target_system: Union[UnitSystem, str],
) -> Dict[str, Any]:
    """Convert selected fields of a record.

    Args:
        record: Input record, e.g. ``{"pressure": 3000, "well": "A-1"}``
        categories: Field name to unit category, e.g. ``{"pressure": "pressure"}``
        target_system: Target unit system

    Returns:
        New dict; fields not listed in ``categories`` are copied unchanged.
    """
    converted = dict(record)
    for name, category in categories.items():
        if name in converted:
            converted[name] = convert_value(converted[name], category, target_system)
    return converted
