"""Diagnostic time functions for pressure-transient data.

Shut-in (or falloff) data are re-plotted against transformed time so that a
given flow regime shows up as a straight line:
- Horner time / radial superposition: radial flow on a semi-log plot
- linear superposition and sqrt(dt): linear flow (fractured wells)
- dt ** 0.25: bilinear flow

The transforms assume a single producing period of length ``tp`` followed by
the test, i.e. the two-period superposition case. Non-positive elapsed times
never raise: the Horner ratio is taken as 1 and the root-time functions as 0.

References:
- Horne, R.N., "Modern Well Test Analysis," 5th Ed., 2019.
- Bourdet, D. et al., "Use of Pressure Derivative in Well-Test Interpretation,"
  SPE Formation Evaluation, June 1989.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np

from .config import AnalysisConfig, resolve_config
from .logging_config import get_logger
from .schemas import DiagnosticPoint, Sample

logger = get_logger(__name__)


def horner_time(dt: float, tp: float) -> float:
    """Horner time ratio (tp + dt) / dt, defined as 1 for dt <= 0."""
    if dt <= 0:
        return 1.0
    return (tp + dt) / dt


def radial_superposition(dt: float, tp: float) -> float:
    """Radial superposition time log10((tp + dt) / dt).

    Example:
        >>> radial_superposition(48.0, 48.0)
        0.3010299956639812
    """
    return float(np.log10(horner_time(dt, tp)))


def linear_superposition(dt: float, tp: float) -> float:
    """Linear-flow superposition time sqrt(tp + dt) - sqrt(dt)."""
    dt = max(dt, 0.0)
    return float(np.sqrt(tp + dt) - np.sqrt(dt))


def sqrt_time(dt: float) -> float:
    return float(np.sqrt(dt)) if dt > 0 else 0.0


def fourth_root_time(dt: float) -> float:
    """Bilinear-flow time dt ** 0.25 (0 for dt <= 0)."""
    return float(dt**0.25) if dt > 0 else 0.0


def _as_sample(sample: Union[Sample, Mapping[str, Any]]) -> Sample:
    if isinstance(sample, Sample):
        return sample
    return Sample.from_mapping(sample)


def transform_samples(
    samples: Sequence[Union[Sample, Mapping[str, Any]]],
    producing_time: float,
) -> List[DiagnosticPoint]:
    """Add diagnostic time functions to every sample.

    The output has exactly one point per input sample, in input order, with
    time, pressure and rate copied unchanged.

    Args:
        samples: Ordered samples (Sample objects or dicts with time/pressure/rate)
        producing_time: Producing time before the test, tp (hours)

    Returns:
        List of DiagnosticPoint
    """
    points = []
    for raw in samples:
        sample = _as_sample(raw)
        dt = sample.time
        points.append(
            DiagnosticPoint(
                time=sample.time,
                pressure=sample.pressure,
                rate=sample.rate,
                horner_time=horner_time(dt, producing_time),
                radial_superposition=radial_superposition(dt, producing_time),
                linear_superposition=linear_superposition(dt, producing_time),
                sqrt_time=sqrt_time(dt),
                fourth_root_time=fourth_root_time(dt),
            )
        )

    logger.debug(f"Transformed {len(points)} samples with tp={producing_time}")
    return points


# TODO: multi-rate superposition summing over a RateScheduleEntry history;
# only the single producing period (Horner) case is computed today.


def log_derivative(
    times: Sequence[float],
    pressures: Sequence[float],
    l_window: Optional[float] = None,
    config: Optional[AnalysisConfig] = None,
) -> np.ndarray:
    """Bourdet derivative |dp/dln(t)| with an L smoothing window.

    For each point the left and right neighbours are the nearest points at
    least ``l_window`` away in ln(t) (or the ends of the series). The derivative
    is the distance-weighted mean of the left and right slopes. The first point
    uses the right slope only and the last point the left slope only. With
    ``l_window=0`` the immediate neighbours are used.

    Positions with non-positive time are NaN, and the result always has the
    input length.

    Args:
        times: Elapsed times (hours)
        pressures: Pressures (psi)
        l_window: Smoothing window in ln(t) units (default from config, 0.3)
        config: Optional AnalysisConfig supplying the default window

    Returns:
        Array of derivative values (psi)
    """
    t = np.asarray(times, dtype=float)
    p = np.asarray(pressures, dtype=float)
    if t.shape != p.shape:
        raise ValueError("times and pressures must have the same length")
    if l_window is None:
        l_window = resolve_config(config).diagnostics.derivative_window

    derivative = np.full(t.shape, np.nan)
    valid = t > 0
    n = int(np.sum(valid))
    if n < 2:
        return derivative

    x = np.log(t[valid])
    y = p[valid]
    if len(np.unique(x)) < n:
        logger.warning("Duplicate times found; derivative may contain inf/NaN values")

    result = np.empty(n)
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(n):
            j = i - 1
            while j > 0 and x[i] - x[j] < l_window:
                j -= 1
            k = i + 1
            while k < n - 1 and x[k] - x[i] < l_window:
                k += 1

            if i == 0:
                result[i] = (y[k] - y[i]) / (x[k] - x[i])
            elif i == n - 1:
                result[i] = (y[i] - y[j]) / (x[i] - x[j])
            else:
                dx_left = x[i] - x[j]
                dx_right = x[k] - x[i]
                slope_left = (y[i] - y[j]) / dx_left
                slope_right = (y[k] - y[i]) / dx_right
                result[i] = (slope_left * dx_right + slope_right * dx_left) / (
                    dx_left + dx_right
                )

    derivative[valid] = np.abs(result)
    return derivative
