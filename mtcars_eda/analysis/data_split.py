"""Reproducible train/test split stratified on the distribution of a numeric target."""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSplit:
    """Disjoint train/test partition of a table.

    Attributes:
        train: Training rows (all columns of the input table).
        test: Held-out rows.
        strata: Quantile bin of the target per input row, used for stratification.
    """

    train: pd.DataFrame
    test: pd.DataFrame
    strata: pd.Series

    @property
    def sizes(self) -> tuple[int, int]:
        return len(self.train), len(self.test)


def stratified_split(
    df: pd.DataFrame,
    target: str,
    *,
    train_frac: float = 0.8,
    n_bins: int = 5,
    random_state: int | None = 123,
) -> DataSplit:
    """Split ``df`` into train/test sets that both cover the range of ``target``.

    The numeric target is cut into (at most) ``n_bins`` quantile groups with
    :func:`pandas.qcut` and :func:`sklearn.model_selection.train_test_split`
    samples within each group. The training set holds ``round(train_frac * n)``
    rows (26 of 32), the test set the rest. Every row lands in exactly one set.

    Args:
        df: Table to split (index labels must be unique)
        target: Numeric column whose distribution defines the strata
        train_frac: Share of rows used for training, strictly between 0 and 1
        n_bins: Maximum number of quantile groups
        random_state: Seed for the sampling

    Raises:
        KeyError: If ``target`` is missing.
        ValueError: If ``train_frac`` is outside (0, 1) or a set would be empty.
    """
    if target not in df.columns:
        raise KeyError(f"Target column '{target}' not found")
    if not 0 < train_frac < 1:
        raise ValueError(f"train_frac must be strictly between 0 and 1, got {train_frac}.")
    if not df.index.is_unique:
        raise ValueError("Row index must be unique to split the table.")

    n_rows = len(df)
    n_train = int(round(train_frac * n_rows))
    n_test = n_rows - n_train
    if n_train < 1 or n_test < 1:
        raise ValueError(f"Cannot split {n_rows} rows with train_frac={train_frac}: one set would be empty.")

    # every stratum must be represented in both sets
    n_bins = max(1, min(n_bins, n_train, n_test, n_rows // 2))
    strata = pd.qcut(df[target], q=n_bins, labels=False, duplicates="drop")

    # split row positions so any index dtype works
    train_pos, test_pos = train_test_split(
        np.arange(n_rows),
        train_size=n_train,
        test_size=n_test,
        stratify=strata.to_numpy() if strata.nunique() > 1 else None,
        random_state=random_state,
    )
    logger.info("Split %d rows into %d train / %d test (%d strata)", n_rows, n_train, n_test, strata.nunique())
    return DataSplit(train=df.iloc[train_pos], test=df.iloc[test_pos], strata=strata)
