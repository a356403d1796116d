"""Loading, validation and type normalization of the Motor Trend car table."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import numpy as np
import pandas as pd

from mtcars_eda.utils.paths import get_dataset_path

from .base_dataset import BaseDataset, DatasetConfigError
from .mtcars_columns import MtcarsColumn as Col


logger = logging.getLogger(__name__)


class MtcarsDataset(BaseDataset):
    """Loader and type normalizer for the [Motor Trend car road tests](https://stat.ethz.ch/R-manual/R-devel/library/datasets/html/mtcars.html) table.

    The dataset object is the single table threaded through the analysis. Two
    operations mutate it in place and return ``self`` so calls can be chained:
    :meth:`to_nominal` (recast the category-code columns) and
    :meth:`add_cluster_labels` (append the k-means labels). Every later step
    sees these mutations; the row count never changes.

    **Example workflow**:
    >>> from mtcars_eda.data import MtcarsDataset, MTCol
    >>> ds = MtcarsDataset.builtin()
    >>> profile = ds.make_profiler().fit().result()
    >>> profile.n_missing
    0
    >>> _ = ds.to_nominal()
    >>> corr = ds.make_correlation_analyzer().fit().result()
    >>> corr.matrix.loc[MTCol.MPG, MTCol.WT] < 0
    True
    """

    Col = Col

    @classmethod
    def builtin(cls) -> "MtcarsDataset":
        """Materialize the fixed 32 x 11 table shipped with the package."""
        return cls.from_csv(csv_path=get_dataset_path("mtcars"))

    @classmethod
    def from_csv(
        cls,
        csv_path: str | Path | None = None,
        *,
        sep: str = ",",
    ) -> "MtcarsDataset":
        """Load a delimited file holding the 11 measured columns.

        - Normalize column names
        - Use a leading model-name column (if any) as the row index
        - Validate columns and types

        Args:
            csv_path: Path to the CSV file (defaults to the packaged table)
            sep: Field delimiter

        Returns:
            MtcarsDataset instance with loaded and validated data

        Raises:
            DatasetConfigError: If the table is empty, misses expected columns,
                or holds non-numeric values in them.
        """
        csv_path = get_dataset_path("mtcars") if csv_path is None else Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Input table not found at {csv_path}")

        df = pd.read_csv(csv_path, sep=sep).pipe(cls._normalize_col_names).pipe(cls._set_model_index)
        logger.info("Loaded %d rows x %d columns from %s", df.shape[0], df.shape[1], csv_path)
        return cls(df=cls.validate(df))

    @staticmethod
    def _normalize_col_names(df: pd.DataFrame) -> pd.DataFrame:
        """Strip whitespace and lowercase column names."""
        return df.set_axis(df.columns.str.strip().str.lower(), axis=1)

    @staticmethod
    def _set_model_index(df: pd.DataFrame) -> pd.DataFrame:
        """Use the model-name column as index (``model`` or an unnamed first column)."""
        first = df.columns[0] if len(df.columns) else None
        if first == Col.MODEL or (first is not None and first.startswith("unnamed")):
            df = df.set_index(first)
            df.index.name = Col.MODEL
        return df

    @staticmethod
    def validate(df: pd.DataFrame, columns: Sequence[str] | None = None) -> pd.DataFrame:
        """Check that ``df`` is a usable observation table.

        Args:
            df: Candidate table
            columns: Required columns (defaults to the 11 base columns)

        Returns:
            ``df`` restricted to the required columns, in canonical order.

        Raises:
            DatasetConfigError: Empty table, missing or non-numeric columns.
        """
        columns = list(columns or Col.base_columns())
        if df.empty:
            raise DatasetConfigError("Input table is empty.")

        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise DatasetConfigError(f"Input table is missing expected columns: {missing}")

        non_numeric = [col for col in columns if not pd.api.types.is_numeric_dtype(df[col])]
        if non_numeric:
            raise DatasetConfigError(f"Columns must be numeric at load time: {non_numeric}")

        return df.loc[:, columns]

    def to_nominal(self, columns: Iterable[str] | None = None) -> "MtcarsDataset":
        """Recast category-code columns to unordered categoricals in place.

        Categories are the sorted distinct codes, so grouping by the new column
        yields the same partition as grouping by the original numbers.

        Args:
            columns: Columns to recast (defaults to ``cyl, vs, am, gear, carb``)

        Returns:
            Self for method chaining.

        Raises:
            DatasetConfigError: If a requested column does not exist.
        """
        columns = list(Col.nominal_columns() if columns is None else columns)
        self.require_columns(columns)

        df = self.df
        for col in columns:
            if isinstance(df[col].dtype, pd.CategoricalDtype):
                continue
            codes = df[col]
            if pd.api.types.is_float_dtype(codes) and np.all(np.mod(codes.dropna(), 1) == 0):
                codes = codes.astype("Int64")
            df[col] = pd.Categorical(codes, categories=sorted(codes.dropna().unique()), ordered=False)

        self._invalidate_cache()
        logger.info("Recast %s to nominal", ", ".join(columns))
        return self

    def add_cluster_labels(self, labels: Sequence[int] | np.ndarray | pd.Series) -> "MtcarsDataset":
        """Append the cluster assignment as a nominal column in place.

        Args:
            labels: One integer label per row, in row order (or a Series aligned on the index)

        Returns:
            Self for method chaining.

        Raises:
            ValueError: If the number of labels differs from the number of rows.
        """
        if len(labels) != self.n_rows:
            raise ValueError(f"Expected {self.n_rows} cluster labels, got {len(labels)}.")

        values = labels.reindex(self.df.index) if isinstance(labels, pd.Series) else np.asarray(labels)
        self.df[Col.CLUSTER] = pd.Categorical(values, categories=sorted(pd.unique(values)), ordered=False)
        self._invalidate_cache()
        logger.info("Appended %s column with %d levels", Col.CLUSTER, len(self.df[Col.CLUSTER].cat.categories))
        return self
