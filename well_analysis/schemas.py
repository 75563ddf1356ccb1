"""Value objects exchanged between the well-test calculators.

All records are frozen dataclasses: they are built once from imported or
synthetic data and are only ever read by the calculators. Derived records
(diagnostic points, flow-capacity results, IPR and forecast points) are
recomputed from their inputs rather than mutated.

Units follow the Field system unless stated otherwise:
- time in hours (samples) or days (forecast)
- pressure in psi
- rate in STB/day
- permeability in md, lengths in ft, viscosity in cp
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def _is_missing(value: Any) -> bool:
    """Return True for None or NaN."""
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def coalesce(value: Any, default: float) -> float:
    """Return ``value`` as float, or ``default`` when it is None or NaN."""
    if _is_missing(value):
        return float(default)
    return float(value)


@dataclass(frozen=True)
class Sample:
    """Single time-indexed observation from a well test.

    Attributes:
        time: Elapsed time (hours)
        pressure: Bottomhole pressure (psi)
        rate: Surface rate (STB/day)
    """

    time: float
    pressure: float
    rate: float = 0.0

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "Sample":
        """Build a sample from a dict-like record with time/pressure/rate keys."""
        return cls(
            time=float(record["time"]),
            pressure=float(record["pressure"]),
            rate=float(record.get("rate", 0.0) or 0.0),
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class RateScheduleEntry:
    """One leg of a variable-rate production history.

    Attributes:
        time: Start of the leg (hours)
        rate: Rate during the leg (STB/day)
    """

    time: float
    rate: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ModelParameters:
    """Matched reservoir/well model parameters.

    Attributes:
        k: Permeability (md)
        h: Net thickness (ft)
        s: Skin factor (dimensionless)
        C: Wellbore storage coefficient (bbl/psi)
        re: Drainage radius (ft); None uses the configured default
        rw: Wellbore radius (ft); None uses the configured default
    """

    k: float
    h: float
    s: float = 0.0
    C: float = 0.0
    re: Optional[float] = None
    rw: Optional[float] = None

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "ModelParameters":
        """Build parameters from a dict; missing numeric fields fall back to 0."""
        return cls(
            k=coalesce(record.get("k"), 0.0),
            h=coalesce(record.get("h"), 0.0),
            s=coalesce(record.get("s"), 0.0),
            C=coalesce(record.get("C"), 0.0),
            re=None if _is_missing(record.get("re")) else float(record["re"]),
            rw=None if _is_missing(record.get("rw")) else float(record["rw"]),
        )

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


@dataclass(frozen=True)
class FluidProperties:
    """Fluid properties held constant through one calculation.

    Attributes:
        viscosity: Viscosity (cp); None means use the configured default
        formation_volume_factor: FVF (RB/STB); None means use the configured default
    """

    viscosity: Optional[float] = None
    formation_volume_factor: Optional[float] = None

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


@dataclass(frozen=True)
class OutlierReport:
    """Result of screening a numeric series.

    Attributes:
        has_outliers: True when at least one index was flagged
        count: Number of flagged indices
        indices: Flagged positions in the original series
        stats: mean, std, min, max, lower_bound, upper_bound (empty if no valid data)
        method: Screening method used ('zscore' or 'iqr')
    """

    has_outliers: bool = False
    count: int = 0
    indices: List[int] = field(default_factory=list)
    stats: Dict[str, float] = field(default_factory=dict)
    method: str = "zscore"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DataQualityReport:
    """Basic quality metrics for a numeric series."""

    valid_count: int
    total_count: int
    completeness: float
    negative_count: int
    negative_percentage: float
    spike_count: int
    min: float
    max: float
    mean: float
    std: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TimeGap:
    """Interval between consecutive samples larger than the expected step."""

    start_time: float
    end_time: float
    gap_size: float
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DiagnosticPoint:
    """Sample augmented with linearizing time functions.

    Attributes:
        time: Elapsed (shut-in) time, copied from the sample (hours)
        pressure: Pressure, copied from the sample (psi)
        rate: Rate, copied from the sample (STB/day)
        horner_time: (tp + dt) / dt
        radial_superposition: log10 of the Horner ratio
        linear_superposition: sqrt(tp + dt) - sqrt(dt)
        sqrt_time: sqrt(dt)
        fourth_root_time: dt ** 0.25
    """

    time: float
    pressure: float
    rate: float
    horner_time: float
    radial_superposition: float
    linear_superposition: float
    sqrt_time: float
    fourth_root_time: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class FlowCapacityResult:
    """Bulk flow metrics derived from matched parameters.

    Attributes:
        kh: Flow capacity (md-ft)
        transmissibility: kh / viscosity (md-ft/cp)
        pi: Productivity index (STB/day/psi)
        pi_ideal: Productivity index at zero skin (STB/day/psi)
        flow_efficiency: pi / pi_ideal
        damage_ratio: 1 / flow_efficiency
    """

    kh: float
    transmissibility: float
    pi: float
    pi_ideal: float
    flow_efficiency: float
    damage_ratio: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class IPRPoint:
    """Point on an inflow performance curve."""

    pressure: float
    rate: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ForecastPoint:
    """Forecast state at one time step.

    Attributes:
        time: Elapsed time (days)
        pressure: Flowing bottomhole pressure (psi)
        rate: Imposed production rate (STB/day)
    """

    time: float
    pressure: float
    rate: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
