"""OLS fitting, metrics and assumption checks for the linear regression model.

The helpers focus on classical linear regression with ordinary least squares
(OLS) via :class:`statsmodels.regression.linear_model.OLS`. They report the
usual fit summary (coefficients, standard errors, :math:`R^2`, F-statistic),
score a held-out split, and run common assumption checks (normality,
homoscedasticity, autocorrelation, collinearity, influence). Tests are
*diagnostic* rather than definitive: small p-values indicate evidence against
the null, but with 26 training rows they have little power and should be read
alongside the residual plots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy import stats
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from statsmodels.stats import diagnostic as sm_diagnostic
from statsmodels.stats.outliers_influence import variance_inflation_factor
from statsmodels.stats.stattools import durbin_watson, jarque_bera

from .design import ModelSpec, design_matrix


logger = logging.getLogger(__name__)

_INTERCEPT_COLS = ("Intercept", "const")


@dataclass(frozen=True)
class MetricsResult:
    r"""In-sample fit metrics of an OLS model (:math:`n` observations, :math:`p` predictors).

    - :math:`R^2 = 1 - \frac{SS_{res}}{SS_{tot}}`
    - :math:`\bar{R}^2 = 1 - (1 - R^2)\frac{n-1}{n-p-1}`
    - :math:`F = \frac{(SS_{tot} - SS_{res})/p}{SS_{res}/(n-p-1)}`
    - :math:`\text{AIC} = 2k - 2\log L`, :math:`\text{BIC} = k\log n - 2\log L`
    """

    r2: float
    """Coefficient of determination; share of variance explained."""
    adj_r2: float
    f_statistic: float
    """Overall F-test of all slopes being zero."""
    f_pvalue: float
    df_model: int
    df_resid: int
    rmse: float
    mae: float
    aic: float
    bic: float
    n_obs: int

    def __repr__(self) -> str:
        return (
            "MetricsResult("
            f"r2={self.r2:.3f}, adj_r2={self.adj_r2:.3f}, "
            f"F({self.df_model}, {self.df_resid})={self.f_statistic:.2f} (p={self.f_pvalue:.3g}), "
            f"rmse={self.rmse:.3f}, mae={self.mae:.3f}, aic={self.aic:.2f}, bic={self.bic:.2f}, n={self.n_obs})"
        )


@dataclass(frozen=True)
class AssumptionCheckResult:
    """Regression assumption diagnostics.

    - Normality of residuals: Jarque-Bera, Shapiro-Wilk.
    - Homoscedasticity: Breusch-Pagan.
    - Independence: Durbin-Watson.
    - Collinearity: condition number and variance inflation factors (VIF).
    - Influence: leverage and Cook's distance.
    """

    durbin_watson: float
    """Values near 2 indicate no autocorrelation; range [0, 4]."""
    jarque_bera_statistic: float
    jarque_bera_pvalue: float
    shapiro_statistic: float
    shapiro_pvalue: float
    breusch_pagan_statistic: float
    breusch_pagan_pvalue: float
    condition_number: float
    vif: pd.Series
    r"""Variance Inflation Factor per regressor (intercept excluded), :math:`VIF_j = 1 / (1 - R_j^2)`."""
    leverage: np.ndarray
    cooks_distance: np.ndarray
    """Cook's distance per observation; heuristic flags often use ``4/n``."""

    def __repr__(self) -> str:
        alpha = 0.05

        def decision(p_value: float) -> str:
            return "FAIL" if p_value < alpha else "OK"

        n_obs = len(self.cooks_distance)
        cooks_exceed = int(np.sum(self.cooks_distance > 4 / n_obs)) if n_obs else 0
        max_vif = float(self.vif.max()) if not self.vif.empty else float("nan")
        return (
            "AssumptionCheckResult(\n"
            f"  Normality: JB(p={self.jarque_bera_pvalue:.3f}, {decision(self.jarque_bera_pvalue)}); "
            f"Shapiro(W={self.shapiro_statistic:.3f}, p={self.shapiro_pvalue:.3f}, {decision(self.shapiro_pvalue)})\n"
            f"  Homoscedasticity: BP(stat={self.breusch_pagan_statistic:.2f}, p={self.breusch_pagan_pvalue:.3f}, "
            f"{decision(self.breusch_pagan_pvalue)})\n"
            f"  Autocorrelation: Durbin-Watson={self.durbin_watson:.2f}\n"
            f"  Collinearity: cond#={self.condition_number:.2f}, max_vif={max_vif:.2f}\n"
            f"  Influence: max_leverage={float(np.max(self.leverage)):.3f}, "
            f"max_cook={float(np.max(self.cooks_distance)):.3f}, cooks>4/n={cooks_exceed}\n"
            ")"
        )


@dataclass(frozen=True)
class EvalMetrics:
    """Evaluation metrics computed on a holdout dataset."""

    rmse: float
    mae: float
    r2: float
    n_obs: int
    label: str | None = None


@dataclass(frozen=True)
class RegressionResult:
    """Packaged OLS fit, metrics, and diagnostics for reporting.

    Encapsulates the fitted statsmodels result, the design matrix used for the
    fit (intercept included), and convenience prediction/plotting helpers.
    """

    spec: ModelSpec
    model: sm.regression.linear_model.RegressionResultsWrapper
    design_matrix: pd.DataFrame
    y: pd.Series
    metrics: MetricsResult
    assumptions: AssumptionCheckResult
    residuals: pd.Series
    predictions: pd.Series

    def print_summary(self) -> None:
        """Print the statsmodels summary to stdout."""
        print(self.model.summary())

    @property
    def fitted(self) -> pd.Series:
        """Alias for fitted values aligned with ``residuals``."""
        return self.predictions

    @property
    def r2(self) -> float:
        return self.metrics.r2

    @property
    def coefficients(self) -> pd.DataFrame:
        """Coefficient table with columns `estimate`, `std_error`, `t_value`, `p_value`."""
        return pd.DataFrame(
            {
                "estimate": self.model.params,
                "std_error": self.model.bse,
                "t_value": self.model.tvalues,
                "p_value": self.model.pvalues,
            },
        )

    @property
    def feature_columns(self) -> list[str]:
        """Design columns without the intercept."""
        return [col for col in self.design_matrix.columns if col not in _INTERCEPT_COLS]

    def predict(self, df: pd.DataFrame) -> pd.Series:
        """Predict the target for new rows (nominal predictors are encoded like the training data)."""
        x_new, _ = design_matrix(df, self.spec, reference_columns=self.feature_columns)
        x_new = sm.add_constant(x_new, has_constant="add")
        return pd.Series(self.model.predict(x_new), index=df.index, name=f"{self.spec.target}_pred")

    def evaluate(self, df: pd.DataFrame, *, label: str | None = "ols") -> EvalMetrics:
        return evaluate_predictions(df[self.spec.target], self.predict(df), label=label)

    # ------------------------------------------------------------------ plotting shortcuts
    def plot_residuals_vs_fitted(self, **kwargs: object):
        r"""Scatter of residuals :math:`e_i = y_i - \hat{y}_i` versus fitted values with a LOWESS smooth.

        A random cloud around 0 with constant spread is desired; curvature hints at
        a missing term, a funnel at heteroscedasticity.
        """
        from mtcars_eda.plotting.regression_plots import plot_residuals_vs_fitted  # noqa: PLC0415

        return plot_residuals_vs_fitted(self, **kwargs)

    def plot_qq(self, **kwargs: object):
        """Normal Q-Q plot of studentized residuals; points near the 45 degree line indicate normal residuals."""
        from mtcars_eda.plotting.regression_plots import plot_qq  # noqa: PLC0415

        return plot_qq(self, **kwargs)


def fit_ols(train: pd.DataFrame, spec: ModelSpec) -> RegressionResult:
    """Fit ``spec`` by OLS on ``train`` and return the diagnostics bundle.

    Nominal predictors are expanded into indicator columns and an intercept is
    added. Numerical problems (e.g. a singular design) surface from statsmodels
    unchanged.

    Example:
        >>> from mtcars_eda.analysis import ModelSpec, fit_ols
        >>> spec = ModelSpec.of("mpg", ["wt", "hp", "cyl"])
        >>> result = fit_ols(split.train, spec)
        >>> result.coefficients
    """
    x_matrix, y = design_matrix(train, spec)
    x_matrix = sm.add_constant(x_matrix, has_constant="add")
    model = sm.OLS(y, x_matrix).fit()
    logger.info("OLS %s fitted on %d rows: R^2=%.3f", spec, int(model.nobs), model.rsquared)
    return diagnose_ols(model, spec=spec)


def diagnose_ols(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    *,
    spec: ModelSpec,
) -> RegressionResult:
    """Compute metrics and assumption checks for an already-fitted OLS model."""
    design = design_matrix_from_model(model)
    predictions = pd.Series(model.fittedvalues, index=design.index)
    residuals = pd.Series(model.resid, index=design.index)
    y = pd.Series(model.model.endog, index=design.index, name=spec.target)

    return RegressionResult(
        spec=spec,
        model=model,
        design_matrix=design,
        y=y,
        metrics=compute_metrics(model, y_true=y, y_pred=predictions),
        assumptions=compute_assumptions(model, design),
        residuals=residuals,
        predictions=predictions,
    )


def design_matrix_from_model(
    model: sm.regression.linear_model.RegressionResultsWrapper,
) -> pd.DataFrame:
    """Return the fitted design matrix (the model's exogenous matrix)."""
    row_labels = getattr(getattr(model.model, "data", None), "row_labels", None)
    return pd.DataFrame(model.model.exog, columns=model.model.exog_names, index=row_labels)


def evaluate_predictions(y_true: pd.Series, y_pred: pd.Series, *, label: str | None = None) -> EvalMetrics:
    """Holdout RMSE, MAE and :math:`R^2 = 1 - SSE/SST`."""
    y_true = y_true.astype(float)
    return EvalMetrics(
        rmse=float(np.sqrt(mean_squared_error(y_true, y_pred))),
        mae=float(mean_absolute_error(y_true, y_pred)),
        r2=float(r2_score(y_true, y_pred)) if len(y_true) > 1 else float("nan"),
        n_obs=len(y_true),
        label=label,
    )


def compute_vif(design: pd.DataFrame) -> pd.Series:
    r"""Compute VIF per regressor (intercept excluded).

    :math:`VIF_j = \frac{1}{1 - R_j^2}`, where :math:`R_j^2` comes from regressing
    predictor :math:`j` on all other predictors (and the intercept). A single
    regressor has VIF 1.0.
    """
    regressors = [col for col in design.columns if col not in _INTERCEPT_COLS]
    if not regressors:
        return pd.Series(dtype=float)
    if len(regressors) == 1:
        return pd.Series({regressors[0]: 1.0})
    values = design.to_numpy(dtype=float)
    return pd.Series(
        {col: float(variance_inflation_factor(values, design.columns.get_loc(col))) for col in regressors},
    )


def compute_metrics(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    y_true: pd.Series,
    y_pred: pd.Series,
) -> MetricsResult:
    """Collect in-sample fit metrics from the statsmodels result."""
    return MetricsResult(
        r2=float(r2_score(y_true, y_pred)),
        adj_r2=float(model.rsquared_adj),
        f_statistic=float(model.fvalue),
        f_pvalue=float(model.f_pvalue),
        df_model=int(model.df_model),
        df_resid=int(model.df_resid),
        rmse=float(np.sqrt(mean_squared_error(y_true, y_pred))),
        mae=float(mean_absolute_error(y_true, y_pred)),
        aic=float(model.aic),
        bic=float(model.bic),
        n_obs=int(model.nobs),
    )


def compute_assumptions(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    design: pd.DataFrame,
) -> AssumptionCheckResult:
    """Run key regression assumption checks and return structured results."""
    resid = pd.Series(model.resid, index=design.index)

    jb_stat, jb_pvalue, _, _ = jarque_bera(resid)
    shapiro_stat, shapiro_pvalue = stats.shapiro(resid)
    bp_stat, bp_pvalue, _, _ = sm_diagnostic.het_breuschpagan(resid, design.values)

    influence = model.get_influence()
    return AssumptionCheckResult(
        durbin_watson=float(durbin_watson(resid)),
        jarque_bera_statistic=float(jb_stat),
        jarque_bera_pvalue=float(jb_pvalue),
        shapiro_statistic=float(shapiro_stat),
        shapiro_pvalue=float(shapiro_pvalue),
        breusch_pagan_statistic=float(bp_stat),
        breusch_pagan_pvalue=float(bp_pvalue),
        condition_number=float(np.linalg.cond(design.values)),
        vif=compute_vif(design),
        leverage=influence.hat_matrix_diag,
        cooks_distance=influence.cooks_distance[0],
    )
