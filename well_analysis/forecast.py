"""Coarse pressure forecast at a constant production rate.

The forecast combines two regimes:
- infinite-acting radial flow: the semi-log drawdown equation
  dp = m * [log10(t) + log10(k / (phi * mu * ct * rw^2)) - 3.23 + 0.869 * s]
  with m = 162.6 * q * mu * B / (k * h) and t in hours
- boundary-dominated flow: once the elapsed time passes a fixed threshold
  (30 days by default), an extra linear pressure decline at the
  pseudo-steady-state depletion rate of a circular drainage area,
  dp/dt = 0.0744 * q * B / (phi * ct * h * re^2) psi/hr

This is a screening heuristic, not a reservoir simulation. The transient and
skin terms are summed before flooring at zero, so a stimulated well never
forecasts a pressure above the initial pressure. The linear decline is only
applied after the threshold; it is not blended with the transient term.
"""

from typing import List, Optional

import numpy as np

from .config import AnalysisConfig, resolve_config, resolve_radii
from .logging_config import get_logger
from .schemas import ForecastPoint, ModelParameters, coalesce

logger = get_logger(__name__)

HOURS_PER_DAY = 24.0


def _nonzero(value: float) -> float:
    return value if value != 0 else 1.0


def simulate_forecast(
    params: ModelParameters,
    target_rate: float,
    time_horizon_days: float,
    initial_pressure: float,
    fluid_viscosity: Optional[float] = None,
    fluid_fvf: Optional[float] = None,
    config: Optional[AnalysisConfig] = None,
) -> List[ForecastPoint]:
    """Project flowing pressure over a time horizon.

    Args:
        params: Matched model parameters (k, h, s, optional re/rw)
        target_rate: Constant production rate (STB/day)
        time_horizon_days: Forecast horizon (days)
        initial_pressure: Initial reservoir pressure (psi)
        fluid_viscosity: Viscosity (cp); None/NaN uses the configured default
        fluid_fvf: FVF (RB/STB); None/NaN uses the configured default
        config: Optional AnalysisConfig supplying the defaults

    Returns:
        List of ForecastPoint from t = 0 to the horizon (steps + 1 points),
        pressure floored at zero

    Example:
        >>> params = ModelParameters(k=50, h=30, s=2)
        >>> points = simulate_forecast(params, 500, 365, 4000)
        >>> len(points)
        51
    """
    cfg = resolve_config(config)
    viscosity = coalesce(fluid_viscosity, cfg.fluid.viscosity)
    fvf = coalesce(fluid_fvf, cfg.fluid.formation_volume_factor)
    re, rw = resolve_radii(params.re, params.rw, cfg)
    porosity = cfg.forecast.porosity
    ct = cfg.forecast.total_compressibility
    threshold = cfg.forecast.boundary_threshold_days

    kh = params.k * params.h
    slope = 162.6 * target_rate * viscosity * fvf / _nonzero(kh)

    if params.k > 0:
        diffusivity_term = np.log10(
            params.k / _nonzero(porosity * viscosity * ct * rw**2)
        )
    else:
        diffusivity_term = 0.0
    skin_drop = 0.869 * slope * params.s

    depletion_rate = (
        0.0744 * target_rate * fvf / _nonzero(porosity * ct * params.h * re**2)
    ) * HOURS_PER_DAY

    times = np.linspace(0.0, time_horizon_days, cfg.forecast.steps + 1)
    points = []
    for t in times:
        if t <= 0:
            pressure = initial_pressure
        else:
            transient = slope * (np.log10(t * HOURS_PER_DAY) + diffusivity_term - 3.23)
            pressure = initial_pressure - max(0.0, transient + skin_drop)
            if t > threshold:
                pressure -= depletion_rate * (t - threshold)

        points.append(
            ForecastPoint(
                time=float(t),
                pressure=float(max(0.0, pressure)),
                rate=float(target_rate),
            )
        )

    logger.debug(
        f"Forecast over {time_horizon_days} days: m={slope:.4g} psi/cycle, "
        f"final p={points[-1].pressure:.1f} psi"
    )
    return points
