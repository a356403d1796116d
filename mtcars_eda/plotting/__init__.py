"""Plotting utilities for data visualization."""

from .clustering_plots import plot_cluster_projection, plot_elbow_curve, plot_silhouette_scores
from .correlation_plots import (
    plot_correlation_glyphs,
    plot_correlation_heatmap,
    plot_scaled_heatmap,
    plot_target_correlations,
)
from .dataset_plots import plot_grouped_boxplot, plot_grouped_violin, plot_histograms, plot_pairplot
from .regression_plots import plot_predicted_vs_actual, plot_qq, plot_residuals_vs_fitted


__all__ = [
    "plot_cluster_projection",
    "plot_correlation_glyphs",
    "plot_correlation_heatmap",
    "plot_elbow_curve",
    "plot_grouped_boxplot",
    "plot_grouped_violin",
    "plot_histograms",
    "plot_pairplot",
    "plot_predicted_vs_actual",
    "plot_qq",
    "plot_residuals_vs_fitted",
    "plot_scaled_heatmap",
    "plot_silhouette_scores",
    "plot_target_correlations",
]
