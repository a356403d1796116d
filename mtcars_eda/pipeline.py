"""End-to-end analysis run: load, profile, normalize, test, plot, correlate, cluster, model, report.

The steps run strictly in order on one :class:`MtcarsDataset`; the type
normalization (step 3) and the cluster column (step 7) are visible to every
later step. Console blocks go to stdout, progress to logging. Any exception
stops the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from mtcars_eda.analysis import (
    AnovaResult,
    ChiSquareResult,
    ClusteringResult,
    CorrelationResult,
    DataSplit,
    EvalMetrics,
    ModelSpec,
    PCAResult,
    ProfileResult,
    RegressionResult,
    TreeResult,
    anova_table,
    chi_square_independence,
    fit_ols,
    fit_regression_tree,
    one_way_anova,
    stratified_split,
)
from mtcars_eda.data import MtcarsDataset
from mtcars_eda.plotting import (
    plot_cluster_projection,
    plot_correlation_glyphs,
    plot_grouped_boxplot,
    plot_grouped_violin,
    plot_histograms,
    plot_pairplot,
    plot_predicted_vs_actual,
    plot_qq,
    plot_residuals_vs_fitted,
    plot_scaled_heatmap,
)
from mtcars_eda.reporting import export_figure, figure_to_base64, render_report, table_to_html
from mtcars_eda.utils.config import PipelineConfig


logger = logging.getLogger(__name__)

_ALPHA = 0.05


@dataclass
class PipelineResult:
    """Everything a run produced, in step order."""

    dataset: MtcarsDataset
    profile: ProfileResult
    anova: AnovaResult
    anova_table: pd.DataFrame
    chi_square: ChiSquareResult
    correlation: CorrelationResult
    clustering: ClusteringResult
    pca: PCAResult
    split: DataSplit
    ols: RegressionResult
    tree: TreeResult
    evaluation: list[EvalMetrics]
    image_path: Path
    report_path: Path
    figures: dict[str, str] = field(default_factory=dict)
    """Base64 PNG per report figure."""

    @property
    def evaluation_table(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"model": m.label, "rmse": m.rmse, "mae": m.mae, "r2": m.r2, "n": m.n_obs} for m in self.evaluation],
        ).set_index("model")


class _FigureSink:
    """Encodes figures for the report and closes them unless they should stay open."""

    def __init__(self, keep_open: bool) -> None:
        self._keep_open = keep_open
        self.encoded: dict[str, str] = {}

    def add(self, name: str, fig: Figure) -> None:
        self.encoded[name] = figure_to_base64(fig)
        if not self._keep_open:
            plt.close(fig)

    def discard(self, fig: Figure) -> None:
        if not self._keep_open:
            plt.close(fig)


def _section(title: str) -> None:
    print(f"\n{'=' * 70}\n{title}\n{'=' * 70}")


def load_dataset(config: PipelineConfig) -> MtcarsDataset:
    if config.csv_path is None:
        logger.info("Loading built-in table")
        return MtcarsDataset.builtin()
    logger.info("Loading table from %s", config.csv_path)
    return MtcarsDataset.from_csv(config.csv_path)


def run_pipeline(config: PipelineConfig | None = None) -> PipelineResult:
    """Run all analysis steps with ``config`` (defaults: :class:`PipelineConfig`).

    Returns:
        :class:`PipelineResult` with every intermediate result and the output paths.
    """
    config = (config or PipelineConfig()).validate()
    sink = _FigureSink(keep_open=config.show_plots)
    spec = ModelSpec.of(config.target, config.predictors)

    with config.plotting.apply():
        # 1. load
        dataset = load_dataset(config)
        spec.validate(dataset.df)
        dataset.require_columns([*config.nominal_columns, config.anova_group, *config.chi_square_columns])
        logger.info("Loaded %d rows x %d columns", dataset.n_rows, dataset.df.shape[1])

        # 2. profile
        _section("Data profile")
        profile = dataset.make_profiler().fit().result()
        profile.print_report()

        # 3. type normalization
        dataset.to_nominal(config.nominal_columns)

        # 4. hypothesis tests
        _section("Hypothesis tests")
        df = dataset.df
        anova = one_way_anova(df, config.target, config.anova_group)
        print(anova)
        anova_tbl = anova_table(df, config.target, config.anova_group)
        print(anova_tbl.round(4).to_string())
        chi_row, chi_col = config.chi_square_columns
        chi_square = chi_square_independence(df, chi_row, chi_col)
        print(chi_square)

        # 5. visualization
        logger.info("Drawing distribution plots")
        sink.add("histograms", plot_histograms(dataset, bins=config.hist_bins))
        sink.add("boxplot", plot_grouped_boxplot(dataset, config.target, config.anova_group))
        sink.discard(plot_grouped_violin(dataset, config.target, config.anova_group))
        sink.discard(plot_pairplot(dataset, hue=config.anova_group))

        # 6. correlation, computed once and shared by every plot and the exported image
        correlation = dataset.make_correlation_analyzer().fit().result()
        logger.info("Correlation matrix over %d numeric columns", correlation.matrix.shape[0])
        sink.add("correlation_glyphs", plot_correlation_glyphs(correlation))
        sink.add("scaled_heatmap", plot_scaled_heatmap(correlation))
        image_path = export_figure(lambda: plot_correlation_glyphs(correlation), config.image_path)

        # 7. clustering on the standardized numeric columns
        clustering = (
            dataset.make_kmeans_clusterer(n_clusters=config.n_clusters, random_state=config.random_state)
            .fit()
            .result()
        )
        dataset.add_cluster_labels(clustering.labels)
        _section("k-means clustering")
        print(f"Cluster sizes (k={config.n_clusters}):")
        print(clustering.sizes.to_string())
        pca = dataset.make_pca_analyzer().fit(n_components=2).result()
        sink.add("cluster_projection", plot_cluster_projection(pca, clustering.labels))

        # 8. models
        split = stratified_split(
            dataset.df,
            config.target,
            train_frac=config.train_frac,
            random_state=config.random_state,
        )
        _section(f"Linear regression: {spec}")
        ols = fit_ols(split.train, spec)
        ols.print_summary()
        print(ols.assumptions)

        _section(f"Regression tree: {spec}")
        tree = fit_regression_tree(split.train, spec, random_state=config.random_state)
        tree.print_summary()

        evaluation = [ols.evaluate(split.test, label="ols"), tree.evaluate(split.test, label="tree")]
        _section("Holdout evaluation")
        for metrics in evaluation:
            print(f"{metrics.label:>5}: RMSE={metrics.rmse:.3f}  MAE={metrics.mae:.3f}  R2={metrics.r2:.3f}")

        fig_resid, (ax_resid, ax_qq) = plt.subplots(1, 2, figsize=(11, 4.5))
        plot_residuals_vs_fitted(ols, ax=ax_resid)
        plot_qq(ols, ax=ax_qq)
        fig_resid.tight_layout()
        sink.add("residuals", fig_resid)

        fig_pred, ax_pred = plt.subplots(figsize=(6, 5))
        plot_predicted_vs_actual(
            split.test[config.target],
            {"OLS": ols.predict(split.test), "Tree": tree.predict(split.test)},
            ax=ax_pred,
        )
        sink.add("predicted_vs_actual", fig_pred)

    if config.show_plots:
        plt.show()

    result = PipelineResult(
        dataset=dataset,
        profile=profile,
        anova=anova,
        anova_table=anova_tbl,
        chi_square=chi_square,
        correlation=correlation,
        clustering=clustering,
        pca=pca,
        split=split,
        ols=ols,
        tree=tree,
        evaluation=evaluation,
        image_path=image_path,
        report_path=config.report_path,
        figures=sink.encoded,
    )

    # 9. report
    render_report(build_report_context(result, config), config.report_template, config.report_path)
    logger.info("Pipeline finished; outputs in %s", config.output_path)
    return result


def build_report_context(result: PipelineResult, config: PipelineConfig) -> dict[str, Any]:
    """Collect the narrative values, tables and figures the report template expects."""
    n_train, n_test = result.split.sizes
    target_corr = result.correlation.target_correlations
    top = target_corr.loc[target_corr["correlation"].abs().idxmax()] if target_corr is not None else None
    return {
        "title": "Motor Trend car road tests: exploratory analysis",
        "target": config.target,
        "predictors": list(config.predictors),
        "alpha": _ALPHA,
        "n_rows": result.profile.shape[0],
        "n_columns": result.profile.shape[1],
        "n_missing": result.profile.n_missing,
        "head_table": table_to_html(result.profile.head),
        "summary_table": table_to_html(result.profile.numeric_summary),
        "structure_table": table_to_html(result.profile.structure, index=False),
        "anova": result.anova,
        "anova_table": table_to_html(result.anova_table, float_format="{:.4g}"),
        "chi_square": result.chi_square,
        "contingency_table": table_to_html(result.chi_square.contingency),
        "top_correlation": {
            "feature": top["feature"] if top is not None else "",
            "correlation": float(top["correlation"]) if top is not None else float("nan"),
        },
        "n_clusters": config.n_clusters,
        "random_state": config.random_state,
        "cluster_sizes_table": table_to_html(result.clustering.sizes.rename("n")),
        "n_train": n_train,
        "n_test": n_test,
        "ols_metrics": result.ols.metrics,
        "coefficients_table": table_to_html(result.ols.coefficients, float_format="{:.4g}"),
        "tree_summary": result.tree.summary(),
        "evaluation_table": table_to_html(result.evaluation_table),
        "figures": result.figures,
    }
