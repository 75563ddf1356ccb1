"""DataFrame views of calculator results for presentation layers.

Calculators always work in field units. ``to_frame`` is where results are
converted for display when the configured ``unit_system`` is ``"si"``.
"""

from typing import Any, Iterable, Optional

import pandas as pd

from .config import AnalysisConfig, resolve_config
from .units import UnitSystem, convert_record, get_unit_label

# Result columns that carry a unit. ``rate`` is taken as a liquid rate (STB/d).
COLUMN_CATEGORIES = {
    "pressure": "pressure",
    "rate": "rate",
}


def to_frame(
    records: Iterable[Any],
    unit_system: Optional[str] = None,
    config: Optional[AnalysisConfig] = None,
) -> pd.DataFrame:
    """Convert result records to a DataFrame, one row per record.

    Accepts any sequence of result dataclasses (anything with ``to_dict``)
    or plain dicts; column order follows the first record's fields.

    Args:
        records: Result records in field units
        unit_system: 'field' or 'si' (default: the config's unit_system)
        config: Optional AnalysisConfig supplying the unit system

    Returns:
        DataFrame; ``df.attrs["units"]`` maps converted columns to unit labels

    Example:
        >>> from well_analysis.ipr import calculate_ipr
        >>> df = to_frame(calculate_ipr(1.0, 1000.0))
        >>> list(df.columns)
        ['pressure', 'rate']
    """
    if unit_system is None:
        unit_system = resolve_config(config).unit_system
    system = UnitSystem(str(unit_system).lower())

    rows = [r.to_dict() if hasattr(r, "to_dict") else dict(r) for r in records]
    if system is UnitSystem.SI:
        rows = [convert_record(row, COLUMN_CATEGORIES, system) for row in rows]

    df = pd.DataFrame(rows)
    df.attrs["units"] = {
        column: get_unit_label(category, system)
        for column, category in COLUMN_CATEGORIES.items()
        if column in df.columns
    }
    return df
