"""Calculation defaults and configuration file support.

The calculators never reject a call because a physical parameter is missing;
they fall back to the defaults held here instead. ``DEFAULT_CONFIG`` is used
whenever a calculator is called with ``config=None``. The same table can be
loaded from TOML or YAML so that a host application can tune the defaults
without code changes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging_config import get_logger
from .schemas import coalesce

try:
    import tomllib as toml_loader
except ImportError:
    import tomli as toml_loader

logger = get_logger(__name__)


@dataclass
class FluidDefaults:
    """Fluid property defaults.

    Attributes:
        viscosity: Fluid viscosity (cp)
        formation_volume_factor: Formation volume factor (RB/STB)
    """

    viscosity: float = 1.0
    formation_volume_factor: float = 1.2


@dataclass
class GeometryDefaults:
    """Well/reservoir geometry defaults.

    Attributes:
        drainage_radius: Drainage radius re (ft)
        wellbore_radius: Wellbore radius rw (ft)
    """

    drainage_radius: float = 1000.0
    wellbore_radius: float = 0.25


@dataclass
class ScreeningConfig:
    """Outlier screening configuration.

    Attributes:
        threshold_sigma: Number of standard deviations for the z-score bounds
        method: Screening method ('zscore' or 'iqr')
        field: Sample field screened by the workflow
    """

    threshold_sigma: float = 3.0
    method: str = "zscore"
    field: str = "pressure"


@dataclass
class DiagnosticConfig:
    """Diagnostic plot configuration.

    Attributes:
        derivative_window: Bourdet smoothing window L, in ln(t) units
    """

    derivative_window: float = 0.3


@dataclass
class IPRConfig:
    """IPR curve configuration.

    Attributes:
        steps: Number of pressure intervals between reservoir pressure and zero
    """

    steps: int = 20


@dataclass
class ForecastConfig:
    """Forecast simulator configuration.

    Attributes:
        steps: Number of time intervals over the horizon
        boundary_threshold_days: Elapsed time after which the linear
            boundary-dominated decline is applied (days)
        porosity: Porosity used by the transient and depletion terms (fraction)
        total_compressibility: Total compressibility (1/psi)
    """

    steps: int = 50
    boundary_threshold_days: float = 30.0
    porosity: float = 0.15
    total_compressibility: float = 1e-5


@dataclass
class AnalysisConfig:
    """Complete calculation configuration.

    Attributes:
        fluid: Fluid defaults
        geometry: Geometry defaults
        screening: Outlier screening settings
        diagnostics: Derivative settings
        ipr: IPR settings
        forecast: Forecast settings
        unit_system: Display unit system ('field' or 'si')
        log_level: Logging level name
        log_file: Optional log file path
    """

    fluid: FluidDefaults = field(default_factory=FluidDefaults)
    geometry: GeometryDefaults = field(default_factory=GeometryDefaults)
    screening: ScreeningConfig = field(default_factory=ScreeningConfig)
    diagnostics: DiagnosticConfig = field(default_factory=DiagnosticConfig)
    ipr: IPRConfig = field(default_factory=IPRConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    unit_system: str = "field"
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> "AnalysisConfig":
        """Create AnalysisConfig from a dictionary.

        Missing sections and keys keep their defaults.

        Args:
            config_dict: Configuration dictionary (may be None for all defaults)

        Returns:
            AnalysisConfig instance
        """
        config_dict = config_dict or {}
        unit_system = str(config_dict.get("unit_system", "field")).lower()
        if unit_system not in ("field", "si"):
            raise ValueError(
                f"Unknown unit_system: {unit_system}. Supported: ['field', 'si']"
            )

        return cls(
            fluid=FluidDefaults(**config_dict.get("fluid", {})),
            geometry=GeometryDefaults(**config_dict.get("geometry", {})),
            screening=ScreeningConfig(**config_dict.get("screening", {})),
            diagnostics=DiagnosticConfig(**config_dict.get("diagnostics", {})),
            ipr=IPRConfig(**config_dict.get("ipr", {})),
            forecast=ForecastConfig(**config_dict.get("forecast", {})),
            unit_system=unit_system,
            log_level=config_dict.get("log_level", "WARNING"),
            log_file=config_dict.get("log_file"),
        )

    @classmethod
    def from_toml(cls, config_path: str | Path) -> "AnalysisConfig":
        """Load configuration from a TOML file.

        Example:
            >>> from well_analysis.config import AnalysisConfig
            >>> config = AnalysisConfig.from_toml('analysis.toml')
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            config_dict = toml_loader.load(f)

        logger.debug(f"Loaded TOML configuration from {config_path}")
        return cls.from_dict(config_dict)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AnalysisConfig":
        """Load configuration from a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)

        logger.debug(f"Loaded YAML configuration from {config_path}")
        return cls.from_dict(config_dict)

    @classmethod
    def from_file(cls, config_path: str | Path) -> "AnalysisConfig":
        """Load configuration from file, choosing the parser by suffix."""
        config_path = Path(config_path)
        suffix = config_path.suffix.lower()

        format_loaders = {
            ".toml": cls.from_toml,
            ".yaml": cls.from_yaml,
            ".yml": cls.from_yaml,
        }

        loader = format_loaders.get(suffix)
        if loader is None:
            raise ValueError(
                f"Unknown configuration file format: {suffix}. "
                f"Supported formats: {list(format_loaders.keys())}"
            )

        return loader(config_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary.

        ``log_file`` is omitted when unset so the result can be written as TOML.
        """
        config_dict: Dict[str, Any] = {
            "fluid": {
                "viscosity": self.fluid.viscosity,
                "formation_volume_factor": self.fluid.formation_volume_factor,
            },
            "geometry": {
                "drainage_radius": self.geometry.drainage_radius,
                "wellbore_radius": self.geometry.wellbore_radius,
            },
            "screening": {
                "threshold_sigma": self.screening.threshold_sigma,
                "method": self.screening.method,
                "field": self.screening.field,
            },
            "diagnostics": {
                "derivative_window": self.diagnostics.derivative_window,
            },
            "ipr": {"steps": self.ipr.steps},
            "forecast": {
                "steps": self.forecast.steps,
                "boundary_threshold_days": self.forecast.boundary_threshold_days,
                "porosity": self.forecast.porosity,
                "total_compressibility": self.forecast.total_compressibility,
            },
            "unit_system": self.unit_system,
            "log_level": self.log_level,
        }
        if self.log_file is not None:
            config_dict["log_file"] = self.log_file
        return config_dict


DEFAULT_CONFIG = AnalysisConfig()


def resolve_config(config: Optional[AnalysisConfig]) -> AnalysisConfig:
    """Return ``config`` or the module defaults."""
    return DEFAULT_CONFIG if config is None else config


def create_example_config(output_path: str | Path, format: str = "toml") -> None:
    """Write an example configuration file holding the default table.

    Args:
        output_path: Path to save the example configuration
        format: Configuration format ('toml' or 'yaml')

    Example:
        >>> from well_analysis.config import create_example_config
        >>> create_example_config('analysis.toml')
    """
    example_config = AnalysisConfig(log_level="INFO", log_file="well_analysis.log")
    config_dict = example_config.to_dict()
    output_path = Path(output_path)

    if format == "toml":
        import tomli_w

        with open(output_path, "wb") as f:
            tomli_w.dump(config_dict, f)
    elif format in ["yaml", "yml"]:
        with open(output_path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
    else:
        raise ValueError(f"Unknown format: {format}")

    logger.info(f"Example configuration saved to {output_path}")


def resolve_radii(
    drainage_radius: Optional[float],
    wellbore_radius: Optional[float],
    config: Optional[AnalysisConfig] = None,
) -> tuple[float, float]:
    """Return usable (re, rw) in ft.

    Missing values take the configured geometry. Non-positive radii cannot
    enter log10(re/rw) or the drainage area, so they are replaced by the
    configured geometry as well, with a warning.
    """
    cfg = resolve_config(config)
    re = coalesce(drainage_radius, cfg.geometry.drainage_radius)
    rw = coalesce(wellbore_radius, cfg.geometry.wellbore_radius)
    if re <= 0 or rw <= 0:
        logger.warning(
            f"Non-positive radius (re={re}, rw={rw}); using configured geometry"
        )
        re = re if re > 0 else cfg.geometry.drainage_radius
        rw = rw if rw > 0 else cfg.geometry.wellbore_radius
    return re, rw
