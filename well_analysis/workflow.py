"""End-to-end calculation chain for one well test.

Stages run in a fixed order:
raw samples -> outlier screening -> diagnostic time transform ->
flow capacity (from already-matched parameters) -> IPR -> optional forecast.

Each stage is a pure function; this module only wires them together and logs
progress. Parameter matching happens upstream and is not part of the chain.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from .config import AnalysisConfig, resolve_config
from .flow_capacity import calculate_flow_capacity
from .forecast import simulate_forecast
from .ipr import calculate_ipr
from .logging_config import get_logger
from .outliers import screen_samples
from .schemas import (
    DiagnosticPoint,
    FlowCapacityResult,
    FluidProperties,
    ForecastPoint,
    IPRPoint,
    ModelParameters,
    OutlierReport,
    Sample,
)
from .superposition import transform_samples

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Results of one pass through the calculation chain.

    Attributes:
        screening: Outlier report for the screened sample field
        diagnostics: Diagnostic points for the samples kept after screening
        flow_capacity: Flow capacity metrics
        ipr: IPR curve built from the computed productivity index
        forecast: Forecast points, or None when no forecast was requested
    """

    screening: OutlierReport
    diagnostics: List[DiagnosticPoint]
    flow_capacity: FlowCapacityResult
    ipr: List[IPRPoint]
    forecast: Optional[List[ForecastPoint]] = field(default=None)

    def to_dict(self) -> dict:
        return {
            "screening": self.screening.to_dict(),
            "diagnostics": [p.to_dict() for p in self.diagnostics],
            "flow_capacity": self.flow_capacity.to_dict(),
            "ipr": [p.to_dict() for p in self.ipr],
            "forecast": (
                None if self.forecast is None else [p.to_dict() for p in self.forecast]
            ),
        }


def run_analysis(
    samples: Sequence[Union[Sample, Mapping[str, Any]]],
    params: ModelParameters,
    producing_time: float,
    reservoir_pressure: float,
    fluid: Optional[FluidProperties] = None,
    target_rate: Optional[float] = None,
    time_horizon_days: Optional[float] = None,
    fluid_type: str = "oil",
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Run screening, diagnostics, flow capacity, IPR and forecast.

    Args:
        samples: Raw test samples (Sample objects or dicts)
        params: Matched model parameters
        producing_time: Producing time before the test, tp (hours)
        reservoir_pressure: Average reservoir pressure (psi), also the
            forecast's initial pressure
        fluid: Fluid properties (defaults from config when None)
        target_rate: Forecast rate (STB/day); forecast skipped when None
        time_horizon_days: Forecast horizon (days); forecast skipped when None
        fluid_type: 'oil' or 'gas' for the IPR
        config: Optional AnalysisConfig

    Returns:
        AnalysisResult
    """
    cfg = resolve_config(config)
    fluid = fluid or FluidProperties()
    sample_list = [s if isinstance(s, Sample) else Sample.from_mapping(s) for s in samples]

    kept, report = screen_samples(sample_list, config=cfg)
    logger.info(
        f"Screening: {report.count} outliers in {len(sample_list)} samples "
        f"({cfg.screening.method}, field={cfg.screening.field})"
    )

    diagnostics = transform_samples(kept, producing_time)
    logger.info(f"Diagnostics: {len(diagnostics)} points, tp={producing_time} hr")

    capacity = calculate_flow_capacity(
        params, fluid.viscosity, fluid.formation_volume_factor, config=cfg
    )
    logger.info(
        f"Flow capacity: kh={capacity.kh:.4g} md-ft, PI={capacity.pi:.4g}, "
        f"FE={capacity.flow_efficiency:.3f}"
    )

    ipr_curve = calculate_ipr(capacity.pi, reservoir_pressure, fluid_type, config=cfg)
    logger.info(f"IPR: {len(ipr_curve)} points, AOF={ipr_curve[-1].rate:.4g}")

    forecast = None
    if target_rate is not None and time_horizon_days is not None:
        forecast = simulate_forecast(
            params,
            target_rate,
            time_horizon_days,
            reservoir_pressure,
            fluid.viscosity,
            fluid.formation_volume_factor,
            config=cfg,
        )
        logger.info(
            f"Forecast: {len(forecast)} points to {time_horizon_days} days, "
            f"final pressure {forecast[-1].pressure:.1f} psi"
        )
    else:
        logger.debug("No target rate/horizon given; forecast skipped")

    return AnalysisResult(
        screening=report,
        diagnostics=diagnostics,
        flow_capacity=capacity,
        ipr=ipr_curve,
        forecast=forecast,
    )
