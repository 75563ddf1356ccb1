"""Well-test engineering calculation core.

Keep top-level imports lightweight: pandas is only loaded when ``to_frame``
is first accessed.
"""

from . import units
from .config import AnalysisConfig, DEFAULT_CONFIG
from .flow_capacity import calculate_flow_capacity
from .forecast import simulate_forecast
from .ipr import absolute_open_flow, calculate_ipr
from .logging_config import (
    configure_logging,
    configure_logging_from_config,
    get_logger,
)
from .outliers import detect_outliers, screen_samples
from .schemas import (
    DiagnosticPoint,
    FlowCapacityResult,
    FluidProperties,
    ForecastPoint,
    IPRPoint,
    ModelParameters,
    OutlierReport,
    RateScheduleEntry,
    Sample,
)
from .superposition import (
    fourth_root_time,
    horner_time,
    linear_superposition,
    radial_superposition,
    transform_samples,
)
from .units import UnitSystem, convert_value, get_unit_label
from .workflow import AnalysisResult, run_analysis

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AnalysisConfig",
    "AnalysisResult",
    "DEFAULT_CONFIG",
    "DiagnosticPoint",
    "FlowCapacityResult",
    "FluidProperties",
    "ForecastPoint",
    "IPRPoint",
    "ModelParameters",
    "OutlierReport",
    "RateScheduleEntry",
    "Sample",
    "UnitSystem",
    "absolute_open_flow",
    "calculate_flow_capacity",
    "calculate_ipr",
    "configure_logging",
    "configure_logging_from_config",
    "convert_value",
    "detect_outliers",
    "fourth_root_time",
    "get_logger",
    "get_unit_label",
    "horner_time",
    "linear_superposition",
    "radial_superposition",
    "run_analysis",
    "screen_samples",
    "simulate_forecast",
    "to_frame",
    "transform_samples",
    "units",
]


def __getattr__(name: str):
    """Lazily expose the pandas-based helpers."""
    if name == "to_frame":
        from .tabular import to_frame

        return to_frame

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
