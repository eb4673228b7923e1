"""Lazy matplotlib access for the diagnostics plots."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from matplotlib.axes import Axes


def get_plt():
    """Import matplotlib.pyplot on first use; it is an optional dependency."""
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "Plotting requires matplotlib. Install it with: pip install option-engine[plot]"
        ) from e
    return plt


def new_axes(ncols: int = 1, *, figsize=(7, 4)):
    """One row of ``ncols`` axes on a constrained-layout figure."""
    return get_plt().subplots(1, ncols, figsize=figsize, constrained_layout=True)


def finish_ax(ax: Axes, *, xlabel: str, ylabel: str, title: str) -> None:
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    if ax.get_legend_handles_labels()[0]:
        ax.legend()
    ax.grid(alpha=0.25)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)


def require_columns(df, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing required columns: {missing}")
