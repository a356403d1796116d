"""Plotting helpers for regression diagnostics and holdout predictions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from statsmodels.graphics.gofplots import qqplot


if TYPE_CHECKING:
    from mtcars_eda.analysis.ols_helper import RegressionResult


def plot_residuals_vs_fitted(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Residuals vs fitted values with LOESS smooth.

    Wraps [:func:`seaborn.residplot`](https://seaborn.pydata.org/generated/seaborn.residplot.html)
    on the statsmodels OLS residuals contained in ``RegressionResult``.
    """
    ax = ax or plt.gca()
    sns.residplot(x=result.fitted, y=result.residuals, lowess=True, ax=ax, scatter_kws={"alpha": 0.6})
    ax.set_xlabel("Fitted values")
    ax.set_ylabel("Residuals")
    ax.set_title("Residuals vs Fitted")
    return ax


def plot_qq(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """QQ plot of studentized residuals to assess normality."""
    ax = ax or plt.gca()
    influence = result.model.get_influence()
    stud_resid = influence.resid_studentized_internal
    qqplot(stud_resid, line="45", fit=True, ax=ax)
    ax.set_title("QQ plot (studentized residuals)")
    return ax


def plot_predicted_vs_actual(
    actual: pd.Series,
    predictions: Mapping[str, pd.Series],
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Scatter predicted against observed target values for one or more models.

    Points on the dashed identity line are perfect predictions.

    Args:
        actual: Observed target values (e.g. the test split)
        predictions: Model label -> predictions aligned with ``actual``
        ax: Axes to draw into (default: current axes)
    """
    ax = ax or plt.gca()
    lo, hi = float(actual.min()), float(actual.max())
    for label, pred in predictions.items():
        pred = pred.reindex(actual.index)
        sns.scatterplot(x=actual, y=pred, label=label, ax=ax, s=50, alpha=0.8)
        lo, hi = min(lo, float(pred.min())), max(hi, float(pred.max()))
    pad = 0.05 * (hi - lo) if hi > lo else 1.0
    ax.plot([lo - pad, hi + pad], [lo - pad, hi + pad], color="grey", linestyle="--", linewidth=1)
    ax.set_xlabel(f"Observed {actual.name or 'target'}")
    ax.set_ylabel(f"Predicted {actual.name or 'target'}")
    ax.set_title("Predicted vs Observed (test split)")
    ax.legend(title="Model")
    return ax
