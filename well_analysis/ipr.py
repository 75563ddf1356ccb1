"""Inflow Performance Relationship (IPR) curves from a productivity index.

IPR Models Implemented:
- Oil: straight-line IPR, q = PI * (pr - pwf)
- Gas: backpressure equation with exponent 1, q = C * (pr^2 - pwf^2),
  with C = PI / (2 * pr)

Two-phase (Vogel) behaviour below the bubble point is not modelled.

References:
- Fetkovich, M.J., "The Isochronal Testing of Oil Wells," SPE 4529, 1973.
- Rawlins, E.L. and Schellhardt, M.A., "Back-pressure Data on Natural Gas
  Wells and Their Application to Production Practices," USBM Monograph 7, 1935.
"""

from typing import List, Optional

from .config import AnalysisConfig, resolve_config
from .logging_config import get_logger
from .schemas import IPRPoint

logger = get_logger(__name__)

FLUID_TYPES = ("oil", "gas")


def _check_fluid_type(fluid_type: str) -> str:
    fluid_type = fluid_type.lower()
    if fluid_type not in FLUID_TYPES:
        raise ValueError(
            f"Unknown fluid type: {fluid_type}. Supported: {list(FLUID_TYPES)}"
        )
    return fluid_type


def ipr_rate(
    pi: float, reservoir_pressure: float, flowing_pressure: float, fluid_type: str = "oil"
) -> float:
    """Rate at one flowing pressure, clamped at zero.

    Args:
        pi: Productivity index (STB/day/psi or MCF/day/psi)
        reservoir_pressure: Average reservoir pressure (psi)
        flowing_pressure: Bottomhole flowing pressure (psi)
        fluid_type: 'oil' or 'gas'

    Returns:
        Production rate

    Example:
        >>> ipr_rate(1.0, 5000, 3000)
        2000.0
    """
    fluid_type = _check_fluid_type(fluid_type)

    if fluid_type == "oil":
        rate = pi * (reservoir_pressure - flowing_pressure)
    else:
        c = pi / (2.0 * reservoir_pressure) if reservoir_pressure != 0 else 0.0
        rate = c * (reservoir_pressure**2 - flowing_pressure**2)

    return float(max(0.0, rate))


def calculate_ipr(
    pi: float,
    reservoir_pressure: float,
    fluid_type: str = "oil",
    steps: Optional[int] = None,
    config: Optional[AnalysisConfig] = None,
) -> List[IPRPoint]:
    """Generate an IPR curve from reservoir pressure down to zero.

    Flowing pressures are ``reservoir_pressure * (steps - i) / steps`` for
    ``i = 0..steps``, so the curve starts at (pr, 0) and ends at pwf = 0 with
    the maximum rate.

    Args:
        pi: Productivity index
        reservoir_pressure: Average reservoir pressure (psi)
        fluid_type: 'oil' (straight line) or 'gas' (backpressure)
        steps: Number of pressure intervals (default 20, i.e. 21 points)
        config: Optional AnalysisConfig supplying the defaults

    Returns:
        List of IPRPoint in descending pressure order

    Example:
        >>> curve = calculate_ipr(1.0, 1000.0)
        >>> curve[0], curve[-1]
        (IPRPoint(pressure=1000.0, rate=0.0), IPRPoint(pressure=0.0, rate=1000.0))
    """
    cfg = resolve_config(config)
    fluid_type = _check_fluid_type(fluid_type)
    if steps is None:
        steps = cfg.ipr.steps
    if steps < 1:
        raise ValueError("steps must be >= 1")

    curve = []
    for i in range(steps + 1):
        pwf = float(reservoir_pressure * (steps - i) / steps)
        curve.append(
            IPRPoint(
                pressure=pwf,
                rate=ipr_rate(pi, reservoir_pressure, pwf, fluid_type),
            )
        )

    logger.debug(
        f"{fluid_type} IPR: {len(curve)} points, AOF={curve[-1].rate:.4g}"
    )
    return curve


def absolute_open_flow(
    pi: float, reservoir_pressure: float, fluid_type: str = "oil"
) -> float:
    """Absolute open flow, the rate at zero flowing pressure."""
    return ipr_rate(pi, reservoir_pressure, 0.0, fluid_type)
