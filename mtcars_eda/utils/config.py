"""Run configuration of the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mtcars_eda.data.base_dataset import DatasetConfigError
from mtcars_eda.data.mtcars_columns import MtcarsColumn

from .paths import get_template_path
from .plotting_config import PlottingConfig


@dataclass
class PipelineConfig:
    """Every tunable of one pipeline run.

    Defaults reproduce the standard analysis: built-in table, target ``mpg``
    modelled on ``wt + hp + cyl``, ANOVA of the target by ``cyl``, chi-square of
    ``cyl`` x ``am``, three k-means clusters, seed 123 and an 80/20 split.
    """

    csv_path: str | Path | None = None
    """Delimited input file; ``None`` uses the packaged table."""
    output_dir: str | Path = "output"
    image_name: str = "correlation_plot.png"
    report_template: str | Path = field(default_factory=get_template_path)
    report_name: str = "report.html"
    target: str = MtcarsColumn.TARGET.value
    predictors: tuple[str, ...] = ("wt", "hp", "cyl")
    nominal_columns: tuple[str, ...] = field(default_factory=lambda: tuple(MtcarsColumn.nominal_columns()))
    anova_group: str = "cyl"
    chi_square_columns: tuple[str, str] = ("cyl", "am")
    n_clusters: int = 3
    random_state: int = 123
    train_frac: float = 0.8
    hist_bins: int = 10
    show_plots: bool = False
    plotting: PlottingConfig = field(default_factory=PlottingConfig)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def image_path(self) -> Path:
        return self.output_path / self.image_name

    @property
    def report_path(self) -> Path:
        return self.output_path / self.report_name

    def validate(self) -> PipelineConfig:
        """Check the settings before any step runs.

        Raises:
            DatasetConfigError: On an empty predictor list, a target listed as
                predictor, fewer than two clusters or a train fraction outside (0, 1).
            FileNotFoundError: If the report template does not exist.
        """
        if not self.predictors:
            raise DatasetConfigError("At least one predictor is required.")
        if self.target in self.predictors:
            raise DatasetConfigError(f"Target '{self.target}' cannot also be a predictor.")
        if self.n_clusters < 2:
            raise DatasetConfigError(f"n_clusters must be at least 2, got {self.n_clusters}.")
        if not 0 < self.train_frac < 1:
            raise DatasetConfigError(f"train_frac must be strictly between 0 and 1, got {self.train_frac}.")
        if len(self.chi_square_columns) != 2:
            raise DatasetConfigError(f"chi_square_columns needs exactly two columns, got {self.chi_square_columns}.")
        if not Path(self.report_template).is_file():
            raise FileNotFoundError(f"Report template not found: {self.report_template}")
        return self
