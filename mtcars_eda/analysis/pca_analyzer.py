"""PCA projection of the numeric columns, used to draw cluster partitions in two dimensions."""

from dataclasses import dataclass

import pandas as pd
from sklearn.decomposition import PCA

from mtcars_eda.data.views import DatasetView

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class PCAResult:
    """PCA outputs packaged for downstream visualization and reporting.

    Attributes:
        scores: Observation coordinates w.r.t. the principal components; columns `PC1..PCk`, same index as the input data.
        loadings: Feature loadings; index = original feature names, columns `PC1..PCk`. Each `PCi` column is the
            unit-length eigenvector of the sample covariance matrix associated with the i-th largest eigenvalue.
            The signs of the loadings are arbitrary.
        explained_variance: DataFrame with columns `PC`, `variance`, `explained_ratio`, `cumulative_ratio`.
    """

    scores: pd.DataFrame
    loadings: pd.DataFrame
    explained_variance: pd.DataFrame

    def axis_label(self, pc: str) -> str:
        """Axis label such as ``"PC1 (60.1%)"``."""
        ratio = self.explained_variance.set_index("PC").loc[pc, "explained_ratio"]
        return f"{pc} ({ratio:.1%})"


class PCAAnalyzer(BaseAnalyser):
    """Analyzer for Principal Component Analysis (PCA).

    Example:
        >>> from mtcars_eda.data import MtcarsDataset
        >>> pca_result = MtcarsDataset.builtin().to_nominal().make_pca_analyzer().fit(n_components=2).result()
        >>> pca_result.explained_variance
    """

    def __init__(self, view: DatasetView):
        """Initialize the PCA analyzer."""
        self._view = view
        self._pca_model: PCA | None = None
        self._feature_names: list[str] = []

    def fit(self, n_components: int | None = None) -> "PCAAnalyzer":
        r"""Fit a PCA model using :class:`sklearn.decomposition.PCA`.

        The data matrix **X** is projected onto the orthonormal eigenbasis of
        Cov(**X**, **X**), ordered by descending eigenvalue. See the
        [scikit-learn PCA documentation](https://scikit-learn.org/stable/modules/generated/sklearn.decomposition.PCA.html).
        """
        features = self._view.features
        if features.empty:
            raise ValueError("No features available for PCA fitting.")

        self._feature_names = features.columns.tolist()
        self._pca_model = PCA(n_components=n_components)
        self._pca_model.fit(features)
        return self

    @property
    def model(self) -> PCA:
        """Return the fitted scikit-learn PCA model."""
        if self._pca_model is None:
            raise ValueError("PCA model not fitted. Call fit() first.")
        return self._pca_model

    def transform(self) -> pd.DataFrame:
        """Project observations into principal-component space via :meth:`PCA.transform`."""
        transformed = self.model.transform(self._view.features.loc[:, self._feature_names])
        return pd.DataFrame(
            transformed,
            columns=[f"PC{i + 1}" for i in range(transformed.shape[1])],
            index=self._view.df.index,
        )

    def get_explained_variance(self) -> pd.DataFrame:
        """Summarize component-wise variance contributions and cumulative totals."""
        model = self.model
        return pd.DataFrame(
            {
                "PC": [f"PC{i + 1}" for i in range(len(model.explained_variance_ratio_))],
                "variance": model.explained_variance_,
                "explained_ratio": model.explained_variance_ratio_,
                "cumulative_ratio": model.explained_variance_ratio_.cumsum(),
            },
        )

    def get_loading_vectors(self) -> pd.DataFrame:
        """Return PCA loading vectors linking original features to component axes."""
        model = self.model
        return pd.DataFrame(
            model.components_.T,
            index=self._feature_names,
            columns=[f"PC{i}" for i in range(1, model.n_components_ + 1)],
        )

    def result(self) -> PCAResult:
        """Collect PCA scores, loadings, and variance diagnostics for downstream use."""
        return PCAResult(
            scores=self.transform(),
            loadings=self.get_loading_vectors(),
            explained_variance=self.get_explained_variance(),
        )
