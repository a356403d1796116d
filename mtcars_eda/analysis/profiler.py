"""Descriptive profile of a dataset: head, summary statistics, structure and missing values."""

from dataclasses import dataclass
from typing import Self

import pandas as pd

from mtcars_eda.data.views import DatasetView

from .base_analyser import BaseAnalyser


_SUMMARY_STATS: dict[str, str] = {
    "min": "Min.",
    "25%": "1st Qu.",
    "50%": "Median",
    "mean": "Mean",
    "75%": "3rd Qu.",
    "max": "Max.",
}


@dataclass(frozen=True)
class ProfileResult:
    """Profile outputs for console reporting.

    Attributes:
        head: First ``n_head`` rows of the table.
        numeric_summary: Six-number summary (rows ``Min.`` .. ``Max.``) per numeric column.
        level_counts: Per categorical column, row count of every level.
        structure: One row per column with `column`, `dtype`, `n_unique`, `sample`.
        n_missing: Total number of missing cells across the whole table.
        shape: ``(rows, columns)`` of the profiled table.
    """

    head: pd.DataFrame
    numeric_summary: pd.DataFrame
    level_counts: dict[str, pd.Series]
    structure: pd.DataFrame
    n_missing: int
    shape: tuple[int, int]

    def print_report(self) -> None:
        """Print head, summary, structure and missing count to stdout."""
        n_rows, n_cols = self.shape
        print(f"First {len(self.head)} rows:")
        print(self.head.to_string())
        print("\nSummary statistics:")
        if not self.numeric_summary.empty:
            print(self.numeric_summary.round(3).to_string())
        for col, counts in self.level_counts.items():
            print(f"\n{col} (levels):")
            print(counts.to_string())
        print(f"\nStructure: {n_rows} obs. of {n_cols} variables")
        print(self.structure.to_string(index=False))
        print(f"\nMissing values: {self.n_missing}")


class DatasetProfiler(BaseAnalyser):
    """Describe every column of a table without modifying it.

    Example:
        >>> from mtcars_eda.data import MtcarsDataset
        >>> profile = MtcarsDataset.builtin().make_profiler().fit().result()
        >>> profile.print_report()
    """

    def __init__(self, view: DatasetView, n_head: int = 6, n_sample: int = 5) -> None:
        self._view = view
        self._n_head = n_head
        self._n_sample = n_sample
        self._result: ProfileResult | None = None

    def numeric_summary(self) -> pd.DataFrame:
        """Six-number summary of the numeric columns via :meth:`pandas.DataFrame.describe`."""
        numeric = self._view.df.select_dtypes(include=["number"])
        if numeric.columns.empty:
            return pd.DataFrame()
        return numeric.describe().loc[list(_SUMMARY_STATS)].rename(index=_SUMMARY_STATS)

    def level_counts(self) -> dict[str, pd.Series]:
        """Row count per level of each categorical column."""
        categorical = self._view.df.select_dtypes(include=["category"])
        return {col: categorical[col].value_counts(sort=False) for col in categorical.columns}

    def structure(self) -> pd.DataFrame:
        """Column name, dtype, cardinality and leading sample values."""
        df = self._view.df
        return pd.DataFrame(
            {
                "column": df.columns,
                "dtype": [str(dtype) for dtype in df.dtypes],
                "n_unique": [df[col].nunique() for col in df.columns],
                "sample": [" ".join(map(str, df[col].head(self._n_sample).tolist())) for col in df.columns],
            },
        )

    def count_missing(self) -> int:
        return int(self._view.df.isna().sum().sum())

    def fit(self) -> Self:
        df = self._view.df
        self._result = ProfileResult(
            head=df.head(self._n_head),
            numeric_summary=self.numeric_summary(),
            level_counts=self.level_counts(),
            structure=self.structure(),
            n_missing=self.count_missing(),
            shape=df.shape,
        )
        return self

    def result(self) -> ProfileResult:
        if self._result is None:
            raise ValueError("Profiler not fitted. Call fit() first.")
        return self._result
