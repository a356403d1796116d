"""Dataset visualization functions: distributions, grouped comparisons and pairwise scatter."""

import math
from collections.abc import Sequence

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.figure import Figure

from mtcars_eda.data.base_dataset import BaseDataset


def plot_histograms(
    dataset: BaseDataset,
    columns: Sequence[str] | None = None,
    bins: int = 10,
    n_cols: int = 3,
    figsize_per_panel: tuple[float, float] = (4.0, 3.0),
) -> Figure:
    """Plot one frequency histogram per numeric column in a grid.

    Args:
        dataset: Dataset instance with data to visualize
        columns: Columns to draw (default: all numeric columns)
        bins: Number of histogram bins
        n_cols: Panels per grid row
        figsize_per_panel: Size of a single panel (width, height)

    Returns:
        matplotlib Figure object
    """
    columns = list(dataset.numeric_cols if columns is None else columns)
    if not columns:
        raise ValueError("No numeric columns to plot.")
    dataset.require_columns(columns)

    n_cols = min(n_cols, len(columns))
    n_rows = math.ceil(len(columns) / n_cols)
    fig, axs = plt.subplots(
        n_rows,
        n_cols,
        figsize=(figsize_per_panel[0] * n_cols, figsize_per_panel[1] * n_rows),
        squeeze=False,
    )
    flat_axes = axs.ravel()
    for ax, col in zip(flat_axes, columns, strict=False):
        sns.histplot(dataset.df[col], bins=bins, ax=ax, color="steelblue", edgecolor="white")
        pretty = dataset.get_pretty_name(col)
        ax.set_title(pretty)
        ax.set_xlabel(pretty)
        ax.set_ylabel("Frequency")
    for ax in flat_axes[len(columns) :]:
        ax.set_visible(False)

    fig.tight_layout()
    return fig


def plot_grouped_boxplot(
    dataset: BaseDataset,
    value: str,
    group: str,
    figsize: tuple[int, int] = (7, 5),
) -> Figure:
    """Boxplot of ``value`` per level of the nominal column ``group``."""
    dataset.require_columns([value, group])
    fig, ax = plt.subplots(figsize=figsize)
    sns.boxplot(data=dataset.df, x=group, y=value, hue=group, palette="Set2", legend=False, ax=ax)
    ax.set_xlabel(dataset.get_pretty_name(group))
    ax.set_ylabel(dataset.get_pretty_name(value))
    ax.set_title(f"{dataset.get_pretty_name(value)} by {dataset.get_pretty_name(group)}")
    fig.tight_layout()
    return fig


def plot_grouped_violin(
    dataset: BaseDataset,
    value: str,
    group: str,
    figsize: tuple[int, int] = (7, 5),
) -> Figure:
    """Violin plot of ``value`` per level of ``group`` with the individual points overlaid."""
    dataset.require_columns([value, group])
    fig, ax = plt.subplots(figsize=figsize)
    sns.violinplot(data=dataset.df, x=group, y=value, hue=group, palette="Set2", inner=None, legend=False, ax=ax)
    sns.stripplot(data=dataset.df, x=group, y=value, color="black", size=3, alpha=0.6, ax=ax)
    ax.set_xlabel(dataset.get_pretty_name(group))
    ax.set_ylabel(dataset.get_pretty_name(value))
    ax.set_title(f"Distribution of {dataset.get_pretty_name(value)} by {dataset.get_pretty_name(group)}")
    fig.tight_layout()
    return fig


def plot_pairplot(
    dataset: BaseDataset,
    hue: str,
    columns: Sequence[str] | None = None,
    height: float = 2.0,
) -> Figure:
    """Pairwise scatter matrix of the numeric columns coloured by the nominal column ``hue``.

    Wraps [:func:`seaborn.pairplot`](https://seaborn.pydata.org/generated/seaborn.pairplot.html)
    and returns the figure of the resulting ``PairGrid``.
    """
    columns = list(dataset.numeric_cols if columns is None else columns)
    dataset.require_columns([*columns, hue])
    grid = sns.pairplot(
        dataset.df,
        vars=columns,
        hue=hue,
        palette="Set2",
        height=height,
        plot_kws={"s": 18, "alpha": 0.8},
    )
    grid.figure.suptitle(f"Pairwise relationships by {dataset.get_pretty_name(hue)}", y=1.01)
    return grid.figure
