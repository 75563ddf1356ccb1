"""Tests for the end-to-end calculation chain and DataFrame views."""

import math

import pandas as pd
import pytest

import well_analysis
from well_analysis.config import AnalysisConfig
from well_analysis.schemas import FluidProperties, ModelParameters, Sample
from well_analysis.tabular import to_frame
from well_analysis.workflow import run_analysis


@pytest.fixture
def buildup_samples():
    """Synthetic buildup with one gauge spike at index 6."""
    times = [0.1, 0.2, 0.5, 1.0, 2.0, 4.0, 6.0, 8.0, 12.0, 16.0, 20.0, 24.0]
    samples = [
        Sample(time=t, pressure=3000.0 + 50.0 * math.log10(t * 10.0), rate=0.0)
        for t in times
    ]
    samples[6] = Sample(time=6.0, pressure=60000.0, rate=0.0)
    return samples


PARAMS = ModelParameters(k=50.0, h=30.0, s=2.0)


class TestRunAnalysis:
    """Test run_analysis."""

    def test_full_chain(self, buildup_samples):
        """Every stage produces output."""
        result = run_analysis(
            buildup_samples,
            PARAMS,
            producing_time=720.0,
            reservoir_pressure=4000.0,
            fluid=FluidProperties(viscosity=1.0, formation_volume_factor=1.2),
            target_rate=500.0,
            time_horizon_days=60.0,
        )

        assert result.screening.indices == [6]
        assert len(result.diagnostics) == 11
        assert all(p.time != 6.0 for p in result.diagnostics)
        assert result.flow_capacity.kh == 1500.0
        assert len(result.ipr) == 21
        assert result.ipr[-1].rate == pytest.approx(result.flow_capacity.pi * 4000.0)
        assert len(result.forecast) == 51
        assert result.forecast[0].pressure == 4000.0

    def test_forecast_optional(self, buildup_samples):
        """No forecast without a target rate and horizon."""
        result = run_analysis(buildup_samples, PARAMS, 720.0, 4000.0)

        assert result.forecast is None
        assert result.to_dict()["forecast"] is None

    def test_gas_and_dict_samples(self):
        """Dict samples and gas IPR are accepted."""
        samples = [{"time": t, "pressure": 2000.0 + t, "rate": 0.0} for t in (1.0, 2.0, 3.0)]

        result = run_analysis(samples, PARAMS, 100.0, 2500.0, fluid_type="gas")

        assert len(result.diagnostics) == 3
        assert result.ipr[0].pressure == 2500.0

    def test_config_applies_to_every_stage(self, buildup_samples):
        """Configured step counts flow through to IPR and forecast."""
        config = AnalysisConfig.from_dict({"ipr": {"steps": 5}, "forecast": {"steps": 5}})

        result = run_analysis(
            buildup_samples, PARAMS, 720.0, 4000.0,
            target_rate=100.0, time_horizon_days=10.0, config=config,
        )

        assert len(result.ipr) == 6
        assert len(result.forecast) == 6

    def test_to_dict(self, buildup_samples):
        """Results convert to plain data."""
        data = run_analysis(buildup_samples, PARAMS, 720.0, 4000.0).to_dict()

        assert set(data) == {"screening", "diagnostics", "flow_capacity", "ipr", "forecast"}
        assert data["flow_capacity"]["kh"] == 1500.0
        assert data["diagnostics"][0]["horner_time"] == pytest.approx(7201.0)


class TestToFrame:
    """Test DataFrame conversion."""

    def test_ipr_frame(self):
        """IPR points become pressure/rate columns."""
        df = to_frame(well_analysis.calculate_ipr(1.0, 1000.0))

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["pressure", "rate"]
        assert len(df) == 21

    def test_diagnostic_frame(self):
        """Diagnostic points keep the sample columns first."""
        points = well_analysis.transform_samples([Sample(1.0, 3000.0, 0.0)], 24.0)

        df = to_frame(points)

        assert list(df.columns[:3]) == ["time", "pressure", "rate"]
        assert df.loc[0, "horner_time"] == pytest.approx(25.0)

    def test_lazy_package_attribute(self):
        """to_frame is reachable from the package root."""
        assert well_analysis.to_frame is to_frame

    def test_dict_records(self):
        """Plain dicts are accepted."""
        df = to_frame([{"a": 1}, {"a": 2}])

        assert df["a"].tolist() == [1, 2]

    def test_field_units_unchanged(self):
        """Field output is the calculator output, labelled in field units."""
        df = to_frame(well_analysis.calculate_ipr(1.0, 1000.0))

        assert df.loc[0, "pressure"] == 1000.0
        assert df.loc[20, "rate"] == pytest.approx(1000.0)
        assert df.attrs["units"] == {"pressure": "psi", "rate": "STB/d"}

    def test_si_units(self):
        """SI output converts pressure to kPa and rate to m3/d."""
        df = to_frame(well_analysis.calculate_ipr(1.0, 1000.0), unit_system="si")

        assert df.loc[0, "pressure"] == pytest.approx(6894.757)
        assert df.loc[20, "pressure"] == 0.0
        assert df.loc[20, "rate"] == pytest.approx(158.9873)
        assert df.attrs["units"]["pressure"] == "kPa"

    def test_unit_system_from_config(self):
        """The configured unit system is applied when none is passed."""
        config = AnalysisConfig.from_dict({"unit_system": "si"})

        df = to_frame(well_analysis.calculate_ipr(1.0, 1000.0), config=config)

        assert df.loc[0, "pressure"] == pytest.approx(6894.757)

    def test_si_leaves_other_columns(self):
        """Only unit-bearing columns are converted."""
        points = well_analysis.transform_samples([Sample(4.0, 3000.0, 0.0)], 24.0)

        df = to_frame(points, unit_system="si")

        assert df.loc[0, "time"] == 4.0
        assert df.loc[0, "horner_time"] == pytest.approx(7.0)

    def test_unknown_unit_system(self):
        """Unknown unit systems raise."""
        with pytest.raises(ValueError):
            to_frame([{"pressure": 1.0}], unit_system="metric")
