"""Pearson correlation analysis of the numeric columns."""

from dataclasses import dataclass
from typing import Self

import numpy as np
import pandas as pd

from mtcars_eda.data.views import DatasetView

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class CorrelationResult:
    """Correlation analysis outputs grouped for plotting and reporting.

    The matrix is computed once by :class:`CorrelationAnalyzer`; every plot
    (glyph matrix, heatmap, column-scaled heatmap, file export) reads it from here.

    Attributes:
        matrix: Full Pearson correlation matrix (rows/cols = numeric columns in the view).
        pretty_by_col: Mapping from raw column names to presentation labels.
        feature_pairs: DataFrame with columns `feature_a`, `feature_b`, `correlation`,
            `abs_correlation`, `pair`; sorted by strongest absolute correlation.
        target_correlations: Optional DataFrame with columns `feature`, `correlation`
            for feature-vs-target correlations (sorted descending).
    """

    matrix: pd.DataFrame
    pretty_by_col: dict[str, str]
    feature_pairs: pd.DataFrame
    target_correlations: pd.DataFrame | None = None

    @property
    def upper_triangle(self) -> pd.DataFrame:
        """Matrix with entries below the diagonal masked as NaN."""
        mask = np.triu(np.ones(self.matrix.shape, dtype=bool))
        return self.matrix.where(mask)

    # ------------------------------------------------------------------ plotting shortcuts
    def plot_glyphs(self, **kwargs: object):
        """Plot the upper-triangular glyph matrix."""
        from mtcars_eda.plotting.correlation_plots import plot_correlation_glyphs  # noqa: PLC0415

        return plot_correlation_glyphs(self, **kwargs)

    def plot_heatmap(self, **kwargs: object):
        """Plot correlation heatmap using the plotting helper."""
        from mtcars_eda.plotting.correlation_plots import plot_correlation_heatmap  # noqa: PLC0415

        return plot_correlation_heatmap(self, **kwargs)

    def plot_target_correlations(self, **kwargs: object):
        """Plot correlations with the target variable."""
        from mtcars_eda.plotting.correlation_plots import plot_target_correlations  # noqa: PLC0415

        return plot_target_correlations(self, **kwargs)


class CorrelationAnalyzer(BaseAnalyser):
    """Analyzer for computing Pearson correlations between numeric columns.

    Example:
        >>> from mtcars_eda.data import MtcarsDataset
        >>> from mtcars_eda.plotting.correlation_plots import plot_correlation_glyphs, plot_scaled_heatmap
        >>> ds = MtcarsDataset.builtin().to_nominal()
        >>> corr_res = ds.make_correlation_analyzer().fit().result()
        >>> corr_res.matrix.loc["mpg", "wt"]
        -0.8676...
        >>> fig = plot_correlation_glyphs(corr_res)
        >>> grid = plot_scaled_heatmap(corr_res)
    """

    def __init__(self, view: DatasetView):
        """Initialize the correlation analyzer with a dataset view."""
        self._view = view
        self._corr_mat: pd.DataFrame | None = None

    def get_correlation_matrix(self) -> pd.DataFrame:
        """Compute the Pearson correlation matrix via :meth:`pandas.DataFrame.corr`.

        Only continuous columns take part; categorical columns are skipped.
        """
        if self._corr_mat is None:
            numeric = self._view.df.select_dtypes(include=["number"])
            if numeric.shape[1] < 2:
                raise ValueError("Correlation analysis needs at least two numeric columns.")
            self._corr_mat = numeric.corr(method="pearson")
        return self._corr_mat

    def get_top_correlated_pairs(self, n: int = 20) -> pd.DataFrame:
        """Return the strongest absolute Pearson correlations between column pairs.

        The symmetric matrix is vectorized by masking the upper triangle
        (excluding the diagonal) using :func:`np.triu`, then melted for sorting.
        """
        corr_matrix = self.get_correlation_matrix()
        mask = np.triu(np.ones(corr_matrix.shape, dtype=bool), k=1)

        return (
            corr_matrix.where(mask)
            .melt(ignore_index=False, var_name="feature_b", value_name="correlation")
            .dropna()
            .rename_axis("feature_a")
            .reset_index()
            .assign(
                abs_correlation=lambda d: d.correlation.abs(),
                pair=lambda d: d.feature_a + " vs " + d.feature_b,
            )
            .sort_values("abs_correlation", ascending=False)
            .head(n)
            .reset_index(drop=True)
        )

    def get_target_correlations(self) -> pd.DataFrame:
        """Return Pearson correlations between each column and the configured target.

        Returns:
            DataFrame of features and their correlation with the target variable.
        """
        if not self._view.target_col:
            raise ValueError("Dataset view has no target column configured.")

        corr_matrix = self.get_correlation_matrix()
        if self._view.target_col not in corr_matrix.index:
            raise ValueError(f"Target column '{self._view.target_col}' not found in data")

        return (
            corr_matrix.loc[self._view.target_col]
            .drop(self._view.target_col)
            .sort_values(ascending=False)
            .to_frame(name="correlation")
            .assign(feature=lambda d: d.index)
            .reset_index(drop=True)
        )

    def fit(self) -> Self:
        """Compute correlation matrix."""
        self.get_correlation_matrix()
        return self

    def result(self, *, top_n_pairs: int = 20) -> CorrelationResult:
        if self._corr_mat is None:
            raise ValueError("Correlation matrix not computed. Call fit() first.")

        matrix = self._corr_mat
        target_corr = (
            self.get_target_correlations() if self._view.target_col and self._view.target_col in matrix.index else None
        )
        return CorrelationResult(
            matrix=matrix,
            pretty_by_col=dict(self._view.pretty_by_col),
            feature_pairs=self.get_top_correlated_pairs(n=top_n_pairs),
            target_correlations=target_corr,
        )
