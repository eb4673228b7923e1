import numpy as np
import pytest

from option_engine.config import SimulationConfig
from option_engine.diagnostics import (
    convergence_frame,
    coverage_rate,
    default_cases,
    run_cases,
    se_scaling_table,
    seed_coverage,
)
from option_engine.pricers.mc import price_by_simulation


def test_run_cases_table(make_params, base_params):
    cases = default_cases(make_params(**base_params))
    df = run_cases(cases[:4], n_paths=2_000, n_steps=1, seed=0)

    assert list(df["case"]) == [name for name, _ in cases[:4]]
    for col in ("analytic", "mc", "se", "ci_low", "ci_high", "z", "covered"):
        assert col in df.columns
    assert (df["ci_low"] <= df["mc"]).all()
    assert (df["mc"] <= df["ci_high"]).all()
    assert list(df["seed"]) == [0, 1, 2, 3]


def test_default_cases_cover_regimes(make_params, base_params):
    cases = dict(default_cases(make_params(**base_params)))
    assert cases["ITM (S=120)"].spot == 120.0
    assert cases["Long T (5y)"].maturity == 5.0
    assert cases["Dividend (q=2%)"].dividend_yield == 0.02


def test_seed_coverage_and_rate(make_sim):
    df = seed_coverage(make_sim(n_paths=5_000), seeds=range(10))
    assert len(df) == 10
    assert df["seed"].tolist() == list(range(10))
    assert 0.0 <= coverage_rate(df) <= 1.0
    assert np.isnan(coverage_rate(df.iloc[0:0]))


def test_se_scaling_table(make_sim):
    df = se_scaling_table(
        make_sim(), n_paths_list=(4_000, 1_000, 16_000), seeds=(0, 1, 2)
    )
    assert df["n_paths"].tolist() == [1_000, 4_000, 16_000]
    assert df["ratio"].iloc[0] == pytest.approx(1.0)
    assert np.all(np.diff(df["se"]) < 0.0)
    assert df["ratio"].between(0.8, 1.2).all()


def test_convergence_frame(make_sim):
    res = price_by_simulation(make_sim(n_paths=1_050))
    df = convergence_frame(res)
    assert res.convergence_cadence == 11
    assert df["n_paths"].iloc[0] == 11
    assert df["n_paths"].iloc[-1] == 1_050
    assert len(df) == res.convergence_path.size


def test_convergence_frame_follows_configured_cadence(make_sim):
    cfg = SimulationConfig(convergence_points=7)
    res = price_by_simulation(make_sim(n_paths=1_000), config=cfg)
    df = convergence_frame(res)

    assert res.convergence_cadence == 143
    assert df["n_paths"].tolist() == [143, 286, 429, 572, 715, 858, 1_000]
    assert np.array_equal(df["price"].to_numpy(), res.convergence_path)


class TestPlots:
    @pytest.fixture(autouse=True)
    def _agg(self):
        mpl = pytest.importorskip("matplotlib")
        mpl.use("Agg")
        import matplotlib.pyplot as plt

        yield
        plt.close("all")

    def test_convergence_and_sample_paths(self, make_sim):
        from option_engine.diagnostics import plot_convergence_path, plot_sample_paths

        res = price_by_simulation(make_sim(n_paths=1_000, n_steps=10))
        fig, ax = plot_convergence_path(res, analytic=10.45)
        assert len(ax.lines) == 2

        fig, ax = plot_sample_paths(res, maturity=1.0, n_plot=5, strike=100.0)
        assert len(ax.lines) == 6

    def test_case_intervals_use_reported_bounds(self):
        import pandas as pd

        from option_engine.diagnostics import plot_case_intervals

        df = pd.DataFrame(
            {
                "case": ["ATM", "Deep OTM", "ITM"],
                "kind": ["call", "put", "call"],
                "analytic": [10.45, 0.02, 24.0],
                "mc": [10.47, 0.01, 23.5],
                # floored at zero for the deep OTM put
                "ci_low": [10.38, 0.0, 23.4],
                "ci_high": [10.56, 0.03, 23.6],
                "z": [0.4, -1.2, -9.0],
                "covered": [True, True, False],
            }
        )
        fig, (ax1, ax2) = plot_case_intervals(df)

        assert ax1.get_title() == "MC interval vs analytic"
        assert [t.get_text() for t in ax1.get_xticklabels()] == [
            "ITM (call)",
            "Deep OTM (put)",
            "ATM (call)",
        ]
        covered_bars, missed_bars = ax1.containers
        assert covered_bars.get_label() == "CI covers analytic"
        assert missed_bars.get_label() == "CI misses analytic"

        # missed case sorted first; its bar spans [ci_low, ci_high]
        (segments,) = missed_bars.lines[2]
        (x0, lo), (_, hi) = segments.get_segments()[0]
        assert x0 == 0.0
        assert lo == pytest.approx(23.4)
        assert hi == pytest.approx(23.6)

        assert len(ax2.patches) == 3

    def test_case_intervals_from_run_cases(self, make_params, base_params):
        from option_engine.diagnostics import plot_case_intervals

        df = run_cases(
            default_cases(make_params(**base_params))[:3], n_paths=1_000, seed=1
        )
        fig, (ax1, ax2) = plot_case_intervals(df, sort="case", zcrit=None)
        labels = [t.get_text() for t in ax1.get_xticklabels()]
        assert labels == sorted(labels)
        assert len(ax2.lines) == 1

    def test_se_scaling(self, make_sim):
        from option_engine.diagnostics import plot_se_scaling

        scaling = se_scaling_table(make_sim(), n_paths_list=(1_000, 2_000), seeds=(0,))
        fig, ax = plot_se_scaling(scaling)
        assert ax.get_xscale() == "log"

    def test_missing_columns_raise(self):
        import pandas as pd

        from option_engine.diagnostics import plot_case_intervals

        with pytest.raises(ValueError):
            plot_case_intervals(pd.DataFrame({"case": ["a"]}))
