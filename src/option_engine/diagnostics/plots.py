from __future__ import annotations

from typing import Literal

import numpy as np
import pandas as pd

from option_engine.types import SimulationResult

from ._mpl import finish_ax, new_axes, require_columns
from .tables import convergence_frame

_COVERED, _MISSED = "C0", "C3"


def plot_convergence_path(
    res: SimulationResult,
    *,
    analytic: float | None = None,
    figsize=(7, 4),
):
    """Discounted running-mean price vs paths, with the final confidence band."""
    df = convergence_frame(res)
    fig, ax = new_axes(figsize=figsize)

    ax.plot(df["n_paths"], df["price"], lw=1.2, label="MC running price")
    lo, hi = res.confidence_interval
    ax.axhspan(lo, hi, alpha=0.15, label="95% CI (final)")
    if analytic is not None:
        ax.axhline(float(analytic), ls="--", lw=1.0, color="k", label="Analytic")
    finish_ax(ax, xlabel="Number of paths", ylabel="Option price", title="MC convergence")
    return fig, ax


def plot_sample_paths(
    res: SimulationResult,
    *,
    maturity: float,
    n_plot: int | None = None,
    strike: float | None = None,
    figsize=(10, 5),
):
    """Plot stored trajectories against the time grid ``[0, maturity]``."""
    paths = res.sample_paths
    if paths.shape[0] == 0:
        raise ValueError("result holds no sample paths")

    n = paths.shape[0] if n_plot is None else min(int(n_plot), paths.shape[0])
    t = np.linspace(0.0, float(maturity), paths.shape[1])

    fig, ax = new_axes(figsize=figsize)
    for i in range(n):
        ax.plot(t, paths[i], lw=0.6, alpha=0.7)
    if strike is not None:
        ax.axhline(float(strike), ls="--", lw=1.0, color="k", label="Strike")
    finish_ax(
        ax,
        xlabel="t (years)",
        ylabel="Underlying price",
        title=f"Sample paths ({n} of {res.n_paths:,})",
    )
    return fig, ax


def plot_case_intervals(
    df: pd.DataFrame,
    *,
    sort: Literal["abs_z", "case"] = "abs_z",
    zcrit: float | None = 1.96,
    figsize=(12, 5),
):
    """Per-case MC confidence intervals against the analytic price.

    Takes a :func:`~option_engine.diagnostics.tables.run_cases` table. The left
    panel draws each MC estimate with the interval the run reported (lower end
    floored at zero) and the analytic price as a cross; cases whose interval
    misses the analytic price are drawn in red. The right panel shows the
    z-scores, with ``+/-zcrit`` guides when ``zcrit`` is given.
    """
    require_columns(
        df, ["case", "kind", "analytic", "mc", "ci_low", "ci_high", "z", "covered"]
    )

    if sort == "abs_z":
        d = df.iloc[np.argsort(-df["z"].abs().to_numpy(), kind="stable")]
    else:
        d = df.sort_values("case", kind="stable")

    x = np.arange(len(d))
    labels = [f"{c} ({k})" for c, k in zip(d["case"], d["kind"], strict=True)]
    covered = d["covered"].astype(bool).to_numpy()
    mc = d["mc"].to_numpy(dtype=float)
    yerr = np.vstack(
        [mc - d["ci_low"].to_numpy(dtype=float), d["ci_high"].to_numpy(dtype=float) - mc]
    )

    fig, (ax1, ax2) = new_axes(2, figsize=figsize)

    for mask, color, label in (
        (covered, _COVERED, "CI covers analytic"),
        (~covered, _MISSED, "CI misses analytic"),
    ):
        if mask.any():
            ax1.errorbar(
                x[mask], mc[mask], yerr=yerr[:, mask], fmt="o", capsize=3,
                color=color, label=label,
            )
    ax1.plot(x, d["analytic"].to_numpy(dtype=float), "kx", label="Analytic")
    ax1.set_xticks(x, labels, rotation=45, ha="right")
    finish_ax(ax1, xlabel="", ylabel="Option price", title="MC interval vs analytic")

    ax2.bar(x, d["z"].to_numpy(dtype=float), color=np.where(covered, _COVERED, _MISSED))
    ax2.axhline(0.0, lw=1.0, color="k")
    if zcrit is not None:
        for level in (zcrit, -zcrit):
            ax2.axhline(level, ls="--", lw=1.0, color="grey")
    ax2.set_xticks(x, labels, rotation=45, ha="right")
    finish_ax(ax2, xlabel="", ylabel="(MC - analytic) / SE", title="Standardized errors")

    return fig, (ax1, ax2)


def plot_se_scaling(df: pd.DataFrame, *, figsize=(7, 4)):
    """Plot a :func:`~option_engine.diagnostics.tables.se_scaling_table` on log axes."""
    require_columns(df, ["n_paths", "se", "se_ref"])

    fig, ax = new_axes(figsize=figsize)
    ax.plot(df["n_paths"], df["se"], marker="o", label="mean SE")
    ax.plot(df["n_paths"], df["se_ref"], ls="--", label="~ 1/sqrt(n)")
    ax.set_xscale("log")
    ax.set_yscale("log")
    finish_ax(
        ax, xlabel="Number of paths", ylabel="Standard error", title="SE scaling with paths"
    )
    return fig, ax


__all__ = [
    "plot_case_intervals",
    "plot_convergence_path",
    "plot_sample_paths",
    "plot_se_scaling",
]
