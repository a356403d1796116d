"""Correlation analysis visualization functions.

All plots read the matrix stored in :class:`CorrelationResult`; none of them
recomputes correlations.
"""

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.colors import Normalize
from matplotlib.figure import Figure

from mtcars_eda.analysis.correlation_analyzer import CorrelationResult


def _pretty_labels(result: CorrelationResult) -> list[str]:
    return [result.pretty_by_col.get(col, col) for col in result.matrix.columns]


def plot_correlation_glyphs(
    result: CorrelationResult,
    figsize: tuple[int, int] = (9, 8),
    cmap: str = "RdBu",
    max_marker_size: float = 900.0,
    use_pretty_names: bool = False,
) -> Figure:
    """Upper-triangular glyph matrix of the correlations (diagonal included).

    Each cell holds a circle whose area grows with :math:`|r|` and whose colour
    encodes :math:`r` on a diverging map fixed to ``[-1, 1]``, so strong positive
    and strong negative associations are equally prominent.
    """
    matrix = result.matrix
    n_vars = matrix.shape[0]
    rows, cols = np.triu_indices(n_vars)
    values = matrix.to_numpy()[rows, cols]

    fig, ax = plt.subplots(figsize=figsize)
    norm = Normalize(vmin=-1, vmax=1)
    scatter = ax.scatter(
        cols,
        rows,
        s=np.abs(values) * max_marker_size,
        c=values,
        cmap=cmap,
        norm=norm,
        edgecolors="grey",
        linewidths=0.5,
    )
    labels = _pretty_labels(result) if use_pretty_names else matrix.columns.tolist()
    ax.set_xticks(range(n_vars), labels, rotation=45, ha="left", rotation_mode="anchor")
    ax.set_yticks(range(n_vars), labels)
    ax.xaxis.tick_top()
    ax.set_xlim(-0.5, n_vars - 0.5)
    ax.set_ylim(n_vars - 0.5, -0.5)
    ax.set_aspect("equal")
    ax.grid(True, color="lightgrey", linewidth=0.5)
    ax.set_axisbelow(True)
    for spine in ax.spines.values():
        spine.set_visible(False)
    fig.colorbar(scatter, ax=ax, shrink=0.8, label="Pearson correlation")
    ax.set_title("Correlation Matrix (upper triangle)", pad=40)
    fig.tight_layout()
    return fig


def plot_correlation_heatmap(
    result: CorrelationResult,
    figsize: tuple[int, int] = (10, 9),
    **kwargs: object,
) -> Figure:
    """Plot annotated correlation heatmap of all numeric columns."""
    fig, ax = plt.subplots(figsize=figsize)

    label_map = dict(zip(result.matrix.columns, _pretty_labels(result), strict=True))

    sns.heatmap(
        result.matrix.rename(index=label_map, columns=label_map),
        annot=True,
        fmt=".2f",
        cmap="coolwarm",
        vmin=-1,
        vmax=1,
        ax=ax,
        square=True,
        cbar_kws={"shrink": 0.8},
        **kwargs,  # type: ignore[arg-type]
    )

    ax.set_xticklabels(
        ax.get_xticklabels(),
        rotation=45,
        ha="right",
        rotation_mode="anchor",
    )
    ax.tick_params(axis="y", rotation=0)
    ax.set_title("Feature Correlation Heatmap")
    fig.tight_layout()

    return fig


def plot_scaled_heatmap(
    result: CorrelationResult,
    figsize: tuple[int, int] = (9, 9),
    cmap: str = "viridis",
    **kwargs: object,
) -> Figure:
    """Column-scaled heatmap of the correlation matrix with row and column dendrograms.

    Wraps [:func:`seaborn.clustermap`](https://seaborn.pydata.org/generated/seaborn.clustermap.html)
    with ``z_score=1``: every column is centred and divided by its standard
    deviation before colouring, and rows/columns are reordered by hierarchical
    clustering. Returns the figure of the ``ClusterGrid``.
    """
    grid = sns.clustermap(
        result.matrix,
        z_score=1,
        cmap=cmap,
        figsize=figsize,
        **kwargs,  # type: ignore[arg-type]
    )
    grid.figure.suptitle("Column-scaled correlation heatmap", y=1.02)
    return grid.figure


def plot_target_correlations(
    result: CorrelationResult,
    figsize: tuple[int, int] = (8, 5),
) -> Figure:
    """Bar chart of every feature's correlation with the target, sorted by value."""
    if result.target_correlations is None:
        msg = "CorrelationResult does not include target correlations."
        raise ValueError(msg)

    target_corr = result.target_correlations.copy()
    target_corr["pretty_feature"] = target_corr["feature"].map(lambda c: result.pretty_by_col.get(c, c))
    colors = ["#d62728" if r > 0 else "#1f77b4" for r in target_corr["correlation"]]

    fig, ax = plt.subplots(figsize=figsize)
    sns.barplot(
        data=target_corr,
        x="correlation",
        y="pretty_feature",
        hue="pretty_feature",
        palette=colors,
        legend=False,
        ax=ax,
    )
    ax.set_title("Correlations with Target")
    ax.set_xlabel("Pearson Correlation")
    ax.set_ylabel("")
    ax.set_xlim(-1, 1)
    ax.axvline(0, color="black", linewidth=1, linestyle="--")
    fig.tight_layout()

    return fig
