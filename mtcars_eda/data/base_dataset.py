"""Base dataset class for all dataset implementations."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import pandas as pd
from sklearn.preprocessing import StandardScaler


if TYPE_CHECKING:
    from mtcars_eda.analysis.correlation_analyzer import CorrelationAnalyzer
    from mtcars_eda.analysis.kmeans_clusterer import KMeansClusterer
    from mtcars_eda.analysis.pca_analyzer import PCAAnalyzer
    from mtcars_eda.analysis.profiler import DatasetProfiler

from .base_columns import BaseColumn
from .views import DatasetView


class DatasetConfigError(ValueError):
    """Raised when the input table or the analysis configuration does not fit the dataset definition.

    Configuration errors are detected before any analysis step runs.
    """


class BaseDataset(ABC):
    """Abstract base class for dataset handlers used throughout the toolbox."""

    Col: type[BaseColumn]

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        """Initialize the base dataset.

        Args:
            df: Pre-loaded and validated DataFrame (optional)
        """
        self._df: pd.DataFrame | None = df
        self._scaler: StandardScaler | None = None
        self._df_standardized: pd.DataFrame | None = None

    @classmethod
    @abstractmethod
    def from_csv(cls, csv_path: str | Path, **kwargs: object) -> "BaseDataset":
        """Load dataset from CSV file.

        Args:
            csv_path: Path to the CSV file
            **kwargs: Additional loading parameters

        Returns:
            Dataset instance with loaded data
        """
        ...

    @property
    def df(self) -> pd.DataFrame:
        """Get the raw/cleaned DataFrame.

        Raises:
            ValueError: If dataset not loaded
        """
        if self._df is None:
            raise ValueError("Dataset not loaded. Use from_csv() to load data.")
        return self._df

    @property
    def n_rows(self) -> int:
        return len(self.df)

    @property
    def numeric_cols(self) -> pd.Index:
        """Get continuous column names.

        Categorical columns are excluded, so the result shrinks once nominal
        columns have been recast.
        """
        return self.df.select_dtypes(include=["number"]).columns

    @property
    def nominal_cols(self) -> pd.Index:
        """Get categorical column names."""
        return self.df.select_dtypes(include=["category"]).columns

    @property
    def df_standardized(self) -> pd.DataFrame:
        """Get the DataFrame with numeric columns standardized.

        X <- (X - E[X]) / sd(X)
        """
        if self._df_standardized is None:
            self._df_standardized = self.standardize()
        return self._df_standardized

    def standardize(self, df: pd.DataFrame | None = None) -> pd.DataFrame:
        """Standardize numeric columns with [sklearn's StandardScaler](https://scikit-learn.org/stable/modules/generated/sklearn.preprocessing.StandardScaler.html).

        Categorical columns are passed through unchanged.

        Returns:
            Copy of the DataFrame with numeric columns scaled to mean=0, std=1
        """
        if df is None:
            df = self.df

        numeric_cols = df.select_dtypes(include=["number"]).columns
        if numeric_cols.empty:
            raise ValueError("No numeric columns to standardize.")

        self._scaler = StandardScaler()
        scaled = df.copy()
        scaled[numeric_cols] = pd.DataFrame(
            self._scaler.fit_transform(df[numeric_cols].astype(float)),
            columns=numeric_cols,
            index=df.index,
        )
        return scaled

    def _invalidate_cache(self) -> None:
        """Drop derived frames after an in-place mutation of ``df``."""
        self._df_standardized = None
        self._scaler = None

    def get_pretty_name(self, column_name: str) -> str:
        """Convert column name to pretty name for visualization.

        Args:
            column_name: The cleaned column name

        Returns:
            Pretty name suitable for plot labels and titles
        """
        try:
            col_enum = self.Col(column_name)
        except ValueError:
            # Fallback: capitalize and replace underscores if not in enum
            return column_name.replace("_", " ").title()
        else:
            return str(col_enum.pretty_name)

    def require_columns(self, columns: Iterable[str]) -> None:
        """Raise :class:`DatasetConfigError` if any of ``columns`` is missing."""
        missing = [col for col in columns if col not in self.df.columns]
        if missing:
            raise DatasetConfigError(f"Columns not found in dataset: {missing}. Available: {self.df.columns.tolist()}")

    def view(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        target_col: str | None = None,
        missing_strategy: Literal["drop", "keep"] = "drop",
    ) -> DatasetView:
        """Build an immutable dataset view for analyzers and plotting layers.

        Args:
            columns: Columns to include in the view (defaults to all)
            standardized: Use standardized dataframe
            target_col: Optional target column reference
            missing_strategy: "drop" rows with missing values or "keep" them

        Returns:
            DatasetView containing selected data and metadata
        """
        frame = self.df_standardized if standardized else self.df
        selected_cols = list(columns or frame.columns.to_list())
        self.require_columns(selected_cols)
        frame = frame.loc[:, selected_cols].copy()
        numeric_cols = [col for col in selected_cols if col in self.numeric_cols]

        if missing_strategy == "drop":
            frame = frame.dropna(axis=0, how="any")
        elif missing_strategy != "keep":
            raise ValueError(
                f"Invalid missing_strategy='{missing_strategy}'. Use 'drop' or 'keep'.",
            )

        return DatasetView(
            df=frame,
            pretty_by_col={col: self.get_pretty_name(col) for col in selected_cols},
            numeric_cols=numeric_cols,
            nominal_cols=[col for col in selected_cols if col in self.nominal_cols],
            target_col=target_col or self.Col.TARGET,
            is_standardized=standardized,
        )

    def feature_columns(
        self,
        include_target: bool = False,
        extra_exclude: Iterable[str] | None = None,
    ) -> list[str]:
        """Return numeric feature columns, optionally excluding the target."""
        exclude = set(extra_exclude or ())
        if not include_target and self.Col.TARGET:
            exclude.add(self.Col.TARGET)
        return [col for col in self.numeric_cols if col not in exclude]

    def analyzer_view(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = True,
        include_target: bool = True,
    ) -> DatasetView:
        """Build a dataset view tailored for downstream analyzers."""
        return self.view(
            columns=columns if columns is not None else self.feature_columns(include_target=include_target),
            standardized=standardized,
            target_col=self.Col.TARGET if include_target else None,
        )

    def make_profiler(self, n_head: int = 6) -> "DatasetProfiler":
        """Instantiate a profiler over every column of the current table."""
        from mtcars_eda.analysis.profiler import DatasetProfiler

        return DatasetProfiler(self.view(missing_strategy="keep"), n_head=n_head)

    def make_correlation_analyzer(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = False,
        include_target: bool = True,
    ) -> "CorrelationAnalyzer":
        """Instantiate a correlation analyzer configured for this dataset."""
        from mtcars_eda.analysis.correlation_analyzer import CorrelationAnalyzer

        return CorrelationAnalyzer(
            self.analyzer_view(columns=columns, standardized=standardized, include_target=include_target),
        )

    def make_pca_analyzer(
        self,
        columns: Iterable[str] | None = None,
        standardized: bool = True,
        exclude_target: bool = False,
    ) -> "PCAAnalyzer":
        """Instantiate a PCA analyzer configured for this dataset."""
        from mtcars_eda.analysis.pca_analyzer import PCAAnalyzer

        return PCAAnalyzer(
            self.analyzer_view(
                columns=columns,
                standardized=standardized,
                include_target=not exclude_target,
            ),
        )

    def make_kmeans_clusterer(
        self,
        n_clusters: int = 3,
        columns: Iterable[str] | None = None,
        standardized: bool = True,
        random_state: int | None = 123,
        n_init: int = 25,
    ) -> "KMeansClusterer":
        """Instantiate a k-means clusterer over the numeric columns (target included).

        Example:
            >>> from mtcars_eda.data import MtcarsDataset
            >>> ds = MtcarsDataset.builtin().to_nominal()
            >>> clusters = ds.make_kmeans_clusterer(n_clusters=3).fit().result()
            >>> ds.add_cluster_labels(clusters.labels)
        """
        from mtcars_eda.analysis.kmeans_clusterer import KMeansClusterer

        return KMeansClusterer(
            self.analyzer_view(columns=columns, standardized=standardized, include_target=True),
            n_clusters=n_clusters,
            random_state=random_state,
            n_init=n_init,
        )
