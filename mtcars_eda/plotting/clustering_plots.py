"""Clustering plots: choice of k (elbow, silhouette) and the cluster map on principal components."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure
from matplotlib.patches import Polygon
from scipy.spatial import ConvexHull
from sklearn.cluster import KMeans
from sklearn.metrics import silhouette_score


if TYPE_CHECKING:
    from mtcars_eda.analysis.pca_analyzer import PCAResult


def plot_elbow_curve(
    data: np.ndarray | pd.DataFrame,
    k_range: range | list[int] = range(1, 11),
    *,
    random_state: int | None = 123,
    n_init: int = 25,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Plot within-cluster inertia across candidate k to find the elbow.

    Fits [:class:`sklearn.cluster.KMeans`](https://scikit-learn.org/stable/modules/generated/sklearn.cluster.KMeans.html)
    for each ``k`` and plots the resulting inertia.
    """
    ax = ax or plt.gca()
    inertias = []
    ks = list(k_range)
    for k in ks:
        km = KMeans(n_clusters=k, n_init=n_init, random_state=random_state)
        km.fit(data)
        inertias.append(km.inertia_)
    ax.plot(ks, inertias, marker="o")
    ax.set_xlabel("k")
    ax.set_ylabel("Inertia (within-cluster SSE)")
    ax.set_title("Elbow Plot")
    ax.grid(alpha=0.2)
    return ax


def plot_silhouette_scores(
    data: np.ndarray | pd.DataFrame,
    k_range: range | list[int] = range(2, 11),
    *,
    random_state: int | None = 123,
    n_init: int = 25,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Average silhouette score per k.

    Uses [:func:`sklearn.metrics.silhouette_score`](https://scikit-learn.org/stable/modules/generated/sklearn.metrics.silhouette_score.html)
    to summarize cluster separation.
    """
    ax = ax or plt.gca()
    scores = []
    ks = list(k_range)
    for k in ks:
        km = KMeans(n_clusters=k, n_init=n_init, random_state=random_state)
        labels = km.fit_predict(data)
        scores.append(silhouette_score(data, labels))
    ax.plot(ks, scores, marker="o")
    ax.set_xlabel("k")
    ax.set_ylabel("Average silhouette score")
    ax.set_title("Silhouette Scores by k")
    ax.grid(alpha=0.2)
    return ax


def plot_cluster_projection(
    pca_result: PCAResult,
    labels: pd.Series,
    *,
    components: tuple[str, str] = ("PC1", "PC2"),
    annotate: bool = True,
    figsize: tuple[int, int] = (9, 7),
) -> Figure:
    """Scatter the rows on two principal components, coloured by cluster, with a convex hull per cluster.

    Axis labels carry the share of variance each component explains. Clusters
    with fewer than three points (or collinear points) are drawn without a hull.
    """
    pc_x, pc_y = components
    scores = pca_result.scores.loc[:, [pc_x, pc_y]]
    labels = labels.reindex(scores.index)
    if labels.isna().any():
        raise ValueError("Cluster labels do not cover every projected row.")

    clusters = sorted(labels.unique())
    palette = sns.color_palette("Set2", len(clusters))
    fig, ax = plt.subplots(figsize=figsize)
    for color, cluster in zip(palette, clusters, strict=True):
        points = scores[labels == cluster]
        ax.scatter(points[pc_x], points[pc_y], color=color, s=30, label=f"Cluster {cluster}", zorder=3)
        if len(points) >= 3 and np.linalg.matrix_rank(points.to_numpy() - points.to_numpy().mean(axis=0)) == 2:
            hull = ConvexHull(points.to_numpy())
            ax.add_patch(
                Polygon(points.to_numpy()[hull.vertices], closed=True, facecolor=color, edgecolor=color, alpha=0.25),
            )
    if annotate:
        for name, (x, y) in scores.iterrows():
            ax.annotate(str(name), (x, y), fontsize=7, alpha=0.8, xytext=(3, 3), textcoords="offset points")

    ax.axhline(0, color="grey", linewidth=0.8, linestyle="--")
    ax.axvline(0, color="grey", linewidth=0.8, linestyle="--")
    ax.set_xlabel(pca_result.axis_label(pc_x))
    ax.set_ylabel(pca_result.axis_label(pc_y))
    ax.set_title("Cluster plot")
    ax.legend(title="Cluster")
    fig.tight_layout()
    return fig
