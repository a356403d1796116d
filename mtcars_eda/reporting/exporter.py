"""Writing artifacts: PNG figures and the rendered HTML report.

Every file is opened in a ``with`` block, so the handle is closed whether or
not drawing or rendering succeeds. Errors are never swallowed; the caller (the
pipeline) stops on the first failure.
"""

from __future__ import annotations

import base64
import io
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import pandas as pd
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from matplotlib.figure import Figure


logger = logging.getLogger(__name__)


def export_figure(figure_factory: Callable[[], Figure], path: str | Path, *, dpi: int | None = None) -> Path:
    """Draw a figure into a PNG file.

    The output file is opened first, then ``figure_factory`` draws the figure
    and it is written to the open handle. Whatever happens, the file handle is
    closed and every figure created while drawing is released. On failure the
    partial file is removed and the exception propagates unchanged.

    Args:
        figure_factory: Zero-argument callable returning the figure to save
        path: Destination ``.png`` file; parent directories are created
        dpi: Resolution (default: ``savefig.dpi`` rcParam)

    Returns:
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    open_before = set(plt.get_fignums())
    fig: Figure | None = None
    try:
        with path.open("wb") as handle:
            fig = figure_factory()
            fig.savefig(handle, format="png", dpi=dpi, bbox_inches="tight")
    except BaseException:
        path.unlink(missing_ok=True)
        raise
    finally:
        if fig is not None:
            plt.close(fig)
        for num in set(plt.get_fignums()) - open_before:
            plt.close(num)
    logger.info("Wrote figure to %s", path)
    return path


def figure_to_base64(fig: Figure, *, dpi: int | None = None) -> str:
    """Encode a figure as base64 PNG for inline ``<img src="data:image/png;base64,...">`` embedding."""
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def table_to_html(table: pd.DataFrame | pd.Series, *, float_format: str = "{:.3f}", index: bool = True) -> str:
    """Render a table as an HTML fragment for the report."""
    frame = table.to_frame() if isinstance(table, pd.Series) else table
    return frame.to_html(
        classes="table",
        border=0,
        index=index,
        float_format=float_format.format,
        na_rep="",
    )


def render_report(context: Mapping[str, Any], template_path: str | Path, output_path: str | Path) -> Path:
    """Render the jinja2 report template with ``context`` into ``output_path``.

    The template directory is the template's parent, so templates may extend
    or include siblings. Undefined context variables fail the rendering
    instead of producing empty output.

    Raises:
        FileNotFoundError: If the template does not exist; nothing is written.
        jinja2.TemplateError: If rendering fails; nothing is written.
    """
    template_path = Path(template_path)
    if not template_path.is_file():
        raise FileNotFoundError(f"Report template not found at {template_path}")

    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(enabled_extensions=("html", "j2")),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    rendered = env.get_template(template_path.name).render(**context)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        handle.write(rendered)
    logger.info("Rendered report %s to %s", template_path.name, output_path)
    return output_path
