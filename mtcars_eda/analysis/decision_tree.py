"""Regression tree on the same explicit predictor set as the OLS model."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.tree import DecisionTreeRegressor, export_text

from .design import ModelSpec, design_matrix
from .ols_helper import EvalMetrics, evaluate_predictions


logger = logging.getLogger(__name__)

_LEAF = -1


@dataclass(frozen=True)
class TreeResult:
    """Fitted regression tree plus the design columns it was grown on.

    Every leaf predicts the mean target of its training rows, so predictions
    never leave the observed training range.
    """

    spec: ModelSpec
    model: DecisionTreeRegressor
    feature_columns: list[str]
    target_range: tuple[float, float]

    @property
    def n_leaves(self) -> int:
        return int(self.model.get_n_leaves())

    @property
    def depth(self) -> int:
        return int(self.model.get_depth())

    def summary(self) -> str:
        """Textual tree structure (one line per split / leaf)."""
        header = f"Regression tree: {self.spec} ({self.n_leaves} leaves, depth {self.depth})"
        return header + "\n" + export_text(self.model, feature_names=self.feature_columns, decimals=3)

    def node_table(self) -> pd.DataFrame:
        r"""One row per node in pre-order.

        Columns: `node`, `parent`, `split_var` (``"<leaf>"`` for leaves),
        `threshold` (rows with ``value <= threshold`` go left), `n`,
        `deviance` (within-node sum of squares :math:`\sum_i (y_i - \bar{y})^2`)
        and `yval` (node mean).
        """
        tree = self.model.tree_
        parents = np.full(tree.node_count, _LEAF)
        for node in range(tree.node_count):
            for child in (tree.children_left[node], tree.children_right[node]):
                if child != _LEAF:
                    parents[child] = node

        is_leaf = tree.children_left == _LEAF
        return pd.DataFrame(
            {
                "node": np.arange(tree.node_count),
                "parent": parents,
                "split_var": [
                    "<leaf>" if leaf else self.feature_columns[feat]
                    for leaf, feat in zip(is_leaf, tree.feature, strict=True)
                ],
                "threshold": np.where(is_leaf, np.nan, tree.threshold),
                "n": tree.n_node_samples,
                "deviance": tree.impurity * tree.n_node_samples,
                "yval": tree.value[:, 0, 0],
            },
        )

    def print_summary(self) -> None:
        print(self.summary())
        print(self.node_table().round(3).to_string(index=False))

    def predict(self, df: pd.DataFrame) -> pd.Series:
        x_new, _ = design_matrix(df, self.spec, reference_columns=self.feature_columns)
        return pd.Series(self.model.predict(x_new), index=df.index, name=f"{self.spec.target}_pred")

    def evaluate(self, df: pd.DataFrame, *, label: str | None = "tree") -> EvalMetrics:
        return evaluate_predictions(df[self.spec.target], self.predict(df), label=label)


def fit_regression_tree(
    train: pd.DataFrame,
    spec: ModelSpec,
    *,
    random_state: int | None = 123,
    min_samples_split: int = 20,
    min_samples_leaf: int = 7,
    max_depth: int | None = None,
) -> TreeResult:
    """Grow a :class:`sklearn.tree.DecisionTreeRegressor` (squared-error splits) on ``train``.

    The defaults mirror the classic recursive-partitioning settings: a node is
    only split with at least 20 rows and every leaf keeps at least 7, which
    with 26 training rows yields a shallow, interpretable tree.

    Example:
        >>> tree = fit_regression_tree(split.train, ModelSpec.of("mpg", ["wt", "hp", "cyl"]))
        >>> print(tree.summary())
    """
    x_matrix, y = design_matrix(train, spec)
    model = DecisionTreeRegressor(
        criterion="squared_error",
        min_samples_split=min_samples_split,
        min_samples_leaf=min_samples_leaf,
        max_depth=max_depth,
        random_state=random_state,
    ).fit(x_matrix, y)
    logger.info(
        "Regression tree %s fitted on %d rows: %d leaves, depth %d",
        spec,
        len(y),
        model.get_n_leaves(),
        model.get_depth(),
    )
    return TreeResult(
        spec=spec,
        model=model,
        feature_columns=x_matrix.columns.tolist(),
        target_range=(float(y.min()), float(y.max())),
    )
