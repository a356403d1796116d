"""Export of figures and the rendered analysis report."""

from .exporter import export_figure, figure_to_base64, render_report, table_to_html


__all__ = ["export_figure", "figure_to_base64", "render_report", "table_to_html"]
