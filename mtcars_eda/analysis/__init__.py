"""Analysis modules: profiling, hypothesis tests, correlation, clustering and models."""

from .correlation_analyzer import CorrelationAnalyzer, CorrelationResult
from .data_split import DataSplit, stratified_split
from .decision_tree import TreeResult, fit_regression_tree
from .design import ModelSpec, design_matrix
from .hypothesis_tests import AnovaResult, ChiSquareResult, anova_table, chi_square_independence, one_way_anova
from .kmeans_clusterer import ClusteringResult, KMeansClusterer
from .ols_helper import EvalMetrics, RegressionResult, evaluate_predictions, fit_ols
from .pca_analyzer import PCAAnalyzer, PCAResult
from .profiler import DatasetProfiler, ProfileResult


__all__ = [
    "AnovaResult",
    "ChiSquareResult",
    "ClusteringResult",
    "CorrelationAnalyzer",
    "CorrelationResult",
    "DataSplit",
    "DatasetProfiler",
    "EvalMetrics",
    "KMeansClusterer",
    "ModelSpec",
    "PCAAnalyzer",
    "PCAResult",
    "ProfileResult",
    "RegressionResult",
    "TreeResult",
    "anova_table",
    "chi_square_independence",
    "design_matrix",
    "evaluate_predictions",
    "fit_ols",
    "fit_regression_tree",
    "one_way_anova",
    "stratified_split",
]
