"""Shared plotting configuration (style, palette, font sizes, export resolution)."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import matplotlib as mpl
import plotly.io as pio
import seaborn as sns


_RC_KEYS = (
    "axes.titlesize",
    "axes.labelsize",
    "xtick.labelsize",
    "ytick.labelsize",
    "figure.dpi",
    "savefig.dpi",
    "axes.prop_cycle",
    "font.family",
)


@dataclass
class PlottingConfig:
    """Reusable plotting style applied to the matplotlib, seaborn and plotly figures of a run."""

    style: str = "whitegrid"
    palette: str | list[str] = "Set2"
    font_family: str = "DejaVu Sans"
    font_scale: float = 1.0
    title_size: int = 13
    label_size: int = 11
    tick_size: int = 9
    figure_dpi: int = 100
    savefig_dpi: int = 150
    """Resolution of exported PNG files."""
    context: str = "notebook"
    plotly_template: str = "plotly_white"
    plotly_colorway: list[str] | None = None
    seaborn_kwargs: dict[str, Any] = field(default_factory=dict)

    def _rc_params(self) -> dict[str, Any]:
        palette_colors = sns.color_palette(self.palette)
        return {
            "axes.titlesize": self.title_size,
            "axes.labelsize": self.label_size,
            "xtick.labelsize": self.tick_size,
            "ytick.labelsize": self.tick_size,
            "figure.dpi": self.figure_dpi,
            "savefig.dpi": self.savefig_dpi,
            "axes.prop_cycle": mpl.cycler(color=palette_colors),
            "font.family": [self.font_family],
        }

    def _set_theme(self) -> None:
        sns.set_theme(
            style=self.style,
            palette=sns.color_palette(self.palette),
            context=self.context,
            font_scale=self.font_scale,
            **self.seaborn_kwargs,
        )
        mpl.rcParams.update(self._rc_params())
        pio.templates.default = self.plotly_template
        if self.plotly_colorway is not None:
            pio.templates[self.plotly_template].layout.colorway = self.plotly_colorway

    def apply_global(self) -> None:
        """Apply plotting style globally (no automatic restore).

        Used by the dashboard, which styles every figure of the session. For
        temporary styling (with automatic restoration), use :meth:`apply`.
        """
        self._set_theme()

    @contextmanager
    def apply(self) -> Generator[None]:
        """Apply style within a context, restoring previous rcParams and plotly template afterwards."""
        prev_rc = {key: mpl.rcParams[key] for key in _RC_KEYS}
        prev_plotly_template = pio.templates.default
        prev_colorway = pio.templates[self.plotly_template].layout.colorway

        self._set_theme()
        try:
            yield
        finally:
            pio.templates.default = prev_plotly_template
            pio.templates[self.plotly_template].layout.colorway = prev_colorway
            mpl.rcParams.update(prev_rc)


# Default configuration used across plotting functions
DEFAULT_PLOT_CFG = PlottingConfig()


__all__ = ["DEFAULT_PLOT_CFG", "PlottingConfig"]
