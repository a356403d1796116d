"""Explicit model specification and design-matrix construction.

Models are described by a target column and a validated list of predictor
columns instead of a formula string. Nominal (categorical) predictors are
expanded into one indicator column per non-reference level; the reference
level is the first category (e.g. ``cyl == 4``), so ``cyl`` becomes
``cyl_6`` and ``cyl_8``.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from mtcars_eda.data.base_dataset import DatasetConfigError


@dataclass(frozen=True)
class ModelSpec:
    """Target plus ordered predictor names."""

    target: str
    predictors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.predictors:
            raise DatasetConfigError("A model needs at least one predictor.")
        if self.target in self.predictors:
            raise DatasetConfigError(f"Target '{self.target}' cannot also be a predictor.")
        if len(set(self.predictors)) != len(self.predictors):
            raise DatasetConfigError(f"Duplicate predictors in {list(self.predictors)}.")

    @classmethod
    def of(cls, target: str, predictors: Sequence[str]) -> "ModelSpec":
        return cls(target=str(target), predictors=tuple(str(p) for p in predictors))

    def validate(self, df: pd.DataFrame) -> None:
        """Raise :class:`DatasetConfigError` if a column is missing or the target is not numeric."""
        missing = [col for col in (self.target, *self.predictors) if col not in df.columns]
        if missing:
            raise DatasetConfigError(f"Model columns not found in table: {missing}")
        if not pd.api.types.is_numeric_dtype(df[self.target]):
            raise DatasetConfigError(f"Target '{self.target}' must be numeric, got {df[self.target].dtype}.")

    def nominal_predictors(self, df: pd.DataFrame) -> list[str]:
        return [p for p in self.predictors if isinstance(df[p].dtype, pd.CategoricalDtype)]

    def __str__(self) -> str:
        return f"{self.target} ~ {' + '.join(self.predictors)}"


def design_matrix(
    df: pd.DataFrame,
    spec: ModelSpec,
    reference_columns: Sequence[str] | None = None,
) -> tuple[pd.DataFrame, pd.Series]:
    """Build predictor matrix ``X`` and response ``y`` for ``spec``.

    Args:
        df: Table holding target and predictors
        spec: Model specification
        reference_columns: Design columns of a previously built (training) matrix; the new
            matrix is aligned to them, missing indicator columns are filled with 0.

    Returns:
        ``(X, y)`` with float dtypes and the index of ``df``. ``X`` has no intercept.
    """
    spec.validate(df)
    x_matrix = pd.get_dummies(df.loc[:, list(spec.predictors)], drop_first=True, dtype=float).astype(float)
    if reference_columns is not None:
        unknown = [col for col in x_matrix.columns if col not in reference_columns]
        if unknown:
            raise DatasetConfigError(f"Design columns {unknown} were not present when the model was fitted.")
        x_matrix = x_matrix.reindex(columns=list(reference_columns), fill_value=0.0)
    return x_matrix, df[spec.target].astype(float)
