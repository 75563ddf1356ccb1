"""Flow capacity and productivity from matched model parameters.

Given a matched permeability, thickness and skin, this module derives:
- kh and transmissibility kh/mu
- productivity index (actual and zero-skin)
- flow efficiency and damage ratio

Formula (field units):
    PI = kh / (162.6 * B * mu * (log10(re/rw) - 0.75 + s))

No physically implausible input is rejected. A negative skin yields a flow
efficiency above 1, which is valid for a stimulated well. Only literal
divisions by zero are guarded.
"""

from typing import Optional

import numpy as np

from .config import AnalysisConfig, resolve_config, resolve_radii
from .logging_config import get_logger
from .schemas import FlowCapacityResult, ModelParameters, coalesce

logger = get_logger(__name__)


def productivity_index(
    kh: float,
    skin: float,
    viscosity: float,
    formation_volume_factor: float,
    drainage_radius: float,
    wellbore_radius: float,
) -> float:
    """Productivity index (STB/day/psi) for a given skin.

    A denominator of exactly zero is replaced by 1.

    Args:
        kh: Flow capacity (md-ft)
        skin: Skin factor
        viscosity: Viscosity (cp)
        formation_volume_factor: FVF (RB/STB)
        drainage_radius: re (ft)
        wellbore_radius: rw (ft)

    Returns:
        Productivity index
    """
    denominator = (
        162.6
        * formation_volume_factor
        * viscosity
        * (np.log10(drainage_radius / wellbore_radius) - 0.75 + skin)
    )
    if denominator == 0:
        denominator = 1.0
    return float(kh / denominator)


def calculate_flow_capacity(
    params: ModelParameters,
    fluid_viscosity: Optional[float] = None,
    fluid_fvf: Optional[float] = None,
    config: Optional[AnalysisConfig] = None,
) -> FlowCapacityResult:
    """Derive flow capacity metrics from matched parameters.

    Args:
        params: Matched model parameters (k, h, s, optional re/rw)
        fluid_viscosity: Viscosity (cp); None/NaN uses the configured default (1)
        fluid_fvf: FVF (RB/STB); None/NaN uses the configured default (1.2)
        config: Optional AnalysisConfig supplying the defaults

    Returns:
        FlowCapacityResult

    Example:
        >>> result = calculate_flow_capacity(ModelParameters(k=50, h=30, s=2))
        >>> result.kh
        1500.0
    """
    cfg = resolve_config(config)
    viscosity = coalesce(fluid_viscosity, cfg.fluid.viscosity)
    fvf = coalesce(fluid_fvf, cfg.fluid.formation_volume_factor)
    re, rw = resolve_radii(params.re, params.rw, cfg)

    kh = float(params.k * params.h)
    transmissibility = kh / (viscosity if viscosity != 0 else 1.0)

    pi = productivity_index(kh, params.s, viscosity, fvf, re, rw)
    pi_ideal = productivity_index(kh, 0.0, viscosity, fvf, re, rw)

    if pi_ideal == 0:
        # kh == 0: no flow capacity, ratios undefined
        flow_efficiency = 0.0
        damage_ratio = 0.0
    else:
        flow_efficiency = pi / pi_ideal
        damage_ratio = 1.0 / flow_efficiency if flow_efficiency != 0 else 0.0

    logger.debug(
        f"kh={kh:.4g} md-ft, PI={pi:.4g}, PI_ideal={pi_ideal:.4g}, "
        f"FE={flow_efficiency:.4g}"
    )

    return FlowCapacityResult(
        kh=kh,
        transmissibility=transmissibility,
        pi=pi,
        pi_ideal=pi_ideal,
        flow_efficiency=flow_efficiency,
        damage_ratio=damage_ratio,
    )
