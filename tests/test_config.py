"""Tests for configuration file support."""

import pytest

from well_analysis.config import (
    DEFAULT_CONFIG,
    AnalysisConfig,
    DiagnosticConfig,
    FluidDefaults,
    ForecastConfig,
    GeometryDefaults,
    IPRConfig,
    ScreeningConfig,
    create_example_config,
    resolve_radii,
)


class TestConfigDataclasses:
    """Test configuration dataclasses."""

    def test_defaults_table(self):
        """The default table holds the documented numbers."""
        assert FluidDefaults().viscosity == 1.0
        assert FluidDefaults().formation_volume_factor == 1.2
        assert GeometryDefaults().drainage_radius == 1000.0
        assert GeometryDefaults().wellbore_radius == 0.25
        assert ScreeningConfig().threshold_sigma == 3.0
        assert IPRConfig().steps == 20
        assert ForecastConfig().steps == 50
        assert ForecastConfig().boundary_threshold_days == 30.0
        assert DiagnosticConfig().derivative_window == 0.3

    def test_default_config(self):
        """Module defaults match a fresh AnalysisConfig."""
        assert DEFAULT_CONFIG == AnalysisConfig()
        assert DEFAULT_CONFIG.unit_system == "field"


class TestConfigFromDict:
    """Test creating config from dictionary."""

    def test_from_dict(self):
        """Sections override defaults key by key."""
        config = AnalysisConfig.from_dict(
            {
                "fluid": {"viscosity": 0.8},
                "ipr": {"steps": 40},
                "unit_system": "SI",
                "log_level": "DEBUG",
            }
        )

        assert config.fluid.viscosity == 0.8
        assert config.fluid.formation_volume_factor == 1.2
        assert config.ipr.steps == 40
        assert config.unit_system == "si"
        assert config.log_level == "DEBUG"

    def test_from_empty_dict(self):
        """None or empty gives the defaults."""
        assert AnalysisConfig.from_dict(None) == AnalysisConfig()
        assert AnalysisConfig.from_dict({}) == AnalysisConfig()

    def test_invalid_unit_system(self):
        """Unknown unit systems are rejected."""
        with pytest.raises(ValueError):
            AnalysisConfig.from_dict({"unit_system": "imperial"})

    def test_unknown_key(self):
        """Unknown section keys are rejected by the dataclass."""
        with pytest.raises(TypeError):
            AnalysisConfig.from_dict({"fluid": {"density": 50.0}})

    def test_to_dict_round_trip(self):
        """to_dict feeds back into from_dict."""
        config = AnalysisConfig.from_dict({"forecast": {"porosity": 0.2}, "log_file": "a.log"})

        assert AnalysisConfig.from_dict(config.to_dict()) == config


class TestConfigFiles:
    """Test loading from files."""

    def test_from_toml(self, tmp_path):
        """TOML files are parsed."""
        path = tmp_path / "analysis.toml"
        path.write_text(
            '[fluid]\nviscosity = 2.5\n\n[screening]\nthreshold_sigma = 2.0\nmethod = "iqr"\n'
        )

        config = AnalysisConfig.from_file(path)

        assert config.fluid.viscosity == 2.5
        assert config.screening.threshold_sigma == 2.0
        assert config.screening.method == "iqr"

    def test_from_yaml(self, tmp_path):
        """YAML files are parsed."""
        path = tmp_path / "analysis.yml"
        path.write_text("geometry:\n  drainage_radius: 745.0\nunit_system: si\n")

        config = AnalysisConfig.from_file(path)

        assert config.geometry.drainage_radius == 745.0
        assert config.unit_system == "si"

    def test_unknown_format(self, tmp_path):
        """Unsupported suffixes raise."""
        with pytest.raises(ValueError):
            AnalysisConfig.from_file(tmp_path / "analysis.json")

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AnalysisConfig.from_toml(tmp_path / "missing.toml")


class TestExampleConfig:
    """Test example config creation."""

    @pytest.mark.parametrize("fmt,suffix", [("toml", ".toml"), ("yaml", ".yaml")])
    def test_create_and_load(self, tmp_path, fmt, suffix):
        """Example configs load back to the default table."""
        path = tmp_path / f"example{suffix}"

        create_example_config(path, format=fmt)
        config = AnalysisConfig.from_file(path)

        assert path.exists()
        assert config.fluid == FluidDefaults()
        assert config.log_level == "INFO"
        assert config.log_file == "well_analysis.log"

    def test_unknown_format(self, tmp_path):
        """Unknown output formats raise."""
        with pytest.raises(ValueError):
            create_example_config(tmp_path / "example.ini", format="ini")


class TestResolveRadii:
    """Test drainage/wellbore radius resolution."""

    def test_missing_radii(self):
        """None and NaN take the configured geometry."""
        assert resolve_radii(None, float("nan")) == (1000.0, 0.25)

    def test_valid_radii_kept(self):
        """Positive radii pass through."""
        assert resolve_radii(745.0, 0.35) == (745.0, 0.35)

    def test_non_positive_radii_replaced(self, caplog):
        """Zero or negative radii are replaced one by one, with a warning."""
        with caplog.at_level("WARNING", logger="well_analysis.config"):
            assert resolve_radii(0.0, 0.0) == (1000.0, 0.25)
            assert resolve_radii(500.0, -1.0) == (500.0, 0.25)

        assert "Non-positive radius" in caplog.text

    def test_configured_geometry(self):
        """Fallbacks come from the given config."""
        config = AnalysisConfig.from_dict({"geometry": {"wellbore_radius": 0.35}})

        assert resolve_radii(1200.0, 0.0, config) == (1200.0, 0.35)
