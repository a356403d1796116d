"""k-means partition of the observations on their numeric columns."""

import logging
from dataclasses import dataclass
from typing import Self

import pandas as pd
from sklearn.cluster import KMeans

from mtcars_eda.data.views import DatasetView

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusteringResult:
    r"""k-means outputs.

    Attributes:
        labels: Integer cluster label per row (index = row labels of the input view).
        centers: Centroids in the (possibly standardized) feature space; one row per cluster.
        inertia: Within-cluster sum of squared distances to the centroid,
            :math:`\sum_k \sum_{i \in C_k} \lVert x_i - \mu_k \rVert^2`.
        sizes: Number of rows per cluster.
        n_iter: Lloyd iterations of the best initialization.
        features: Columns the partition was computed on.
    """

    labels: pd.Series
    centers: pd.DataFrame
    inertia: float
    sizes: pd.Series
    n_iter: int
    features: list[str]


class KMeansClusterer(BaseAnalyser):
    """Partition rows into ``n_clusters`` groups with :class:`sklearn.cluster.KMeans`.

    Lloyd's algorithm alternates between assigning each row to its nearest
    centroid and recomputing centroids as group means until the assignment is
    stable or ``max_iter`` is reached. Initialization is seeded
    (``random_state``) and the best of ``n_init`` starts is kept, so the same
    seed, ``k`` and input always give the same partition.

    Example:
        >>> from mtcars_eda.data import MtcarsDataset
        >>> ds = MtcarsDataset.builtin().to_nominal()
        >>> clusters = ds.make_kmeans_clusterer(n_clusters=3, random_state=123).fit().result()
        >>> clusters.sizes
    """

    def __init__(
        self,
        view: DatasetView,
        n_clusters: int = 3,
        random_state: int | None = 123,
        n_init: int = 25,
        max_iter: int = 300,
    ) -> None:
        n_rows = len(view.df)
        if n_clusters < 2:
            raise ValueError(f"n_clusters must be at least 2, got {n_clusters}.")
        if n_clusters > n_rows:
            raise ValueError(f"n_clusters={n_clusters} exceeds the number of rows ({n_rows}).")

        self._view = view
        self._n_clusters = n_clusters
        self._random_state = random_state
        self._n_init = n_init
        self._max_iter = max_iter
        self._model: KMeans | None = None

    def fit(self) -> Self:
        features = self._view.features
        self._model = KMeans(
            n_clusters=self._n_clusters,
            n_init=self._n_init,
            max_iter=self._max_iter,
            random_state=self._random_state,
        ).fit(features.to_numpy(dtype=float))
        logger.info(
            "k-means (k=%d) on %d columns converged after %d iterations, inertia %.3f",
            self._n_clusters,
            features.shape[1],
            self._model.n_iter_,
            self._model.inertia_,
        )
        return self

    @property
    def model(self) -> KMeans:
        if self._model is None:
            raise ValueError("k-means model not fitted. Call fit() first.")
        return self._model

    def result(self) -> ClusteringResult:
        model = self.model
        features = self._view.features
        labels = pd.Series(model.labels_.astype(int), index=self._view.df.index, name="cluster")
        return ClusteringResult(
            labels=labels,
            centers=pd.DataFrame(model.cluster_centers_, columns=features.columns),
            inertia=float(model.inertia_),
            sizes=labels.value_counts().sort_index(),
            n_iter=int(model.n_iter_),
            features=features.columns.tolist(),
        )
