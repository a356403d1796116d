"""Tests for figure export and report rendering."""

import base64
from pathlib import Path

import matplotlib.image as mpimg
import matplotlib.pyplot as plt
import pandas as pd
import pytest

from mtcars_eda.reporting.exporter import export_figure, figure_to_base64, render_report, table_to_html
from mtcars_eda.utils.paths import get_template_path
from mtcars_eda.utils.plotting_config import PlottingConfig


PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _simple_figure():
    fig, ax = plt.subplots()
    ax.plot([1, 2, 3], [3, 1, 2])
    return fig


class TestExportFigure:
    def test_writes_png_and_releases_figure(self, tmp_path: Path) -> None:
        open_before = set(plt.get_fignums())
        path = export_figure(_simple_figure, tmp_path / "nested" / "plot.png")

        assert path.exists()
        assert path.read_bytes().startswith(PNG_MAGIC)
        assert set(plt.get_fignums()) == open_before

    def test_handle_closed_and_error_propagates(self, tmp_path: Path, monkeypatch) -> None:
        handles = []
        original_open = Path.open

        def tracking_open(self, *args, **kwargs):
            handle = original_open(self, *args, **kwargs)
            handles.append(handle)
            return handle

        def failing_factory():
            plt.subplots()
            raise RuntimeError("drawing failed")

        monkeypatch.setattr(Path, "open", tracking_open)
        open_before = set(plt.get_fignums())

        with pytest.raises(RuntimeError, match="drawing failed"):
            export_figure(failing_factory, tmp_path / "broken.png")

        assert len(handles) == 1
        assert handles[0].closed
        assert not (tmp_path / "broken.png").exists()
        assert set(plt.get_fignums()) == open_before

    def test_uses_savefig_dpi_from_plotting_config(self, tmp_path: Path) -> None:
        def square_figure():
            fig, ax = plt.subplots(figsize=(2, 2))
            ax.plot([0, 1], [0, 1])
            return fig

        with PlottingConfig(figure_dpi=50, savefig_dpi=150).apply():
            sharp = export_figure(square_figure, tmp_path / "sharp.png")
        with PlottingConfig(figure_dpi=50, savefig_dpi=50).apply():
            coarse = export_figure(square_figure, tmp_path / "coarse.png")

        sharp_width = mpimg.imread(sharp).shape[1]
        coarse_width = mpimg.imread(coarse).shape[1]
        assert sharp_width / coarse_width == pytest.approx(3.0, rel=0.05)

    def test_unwritable_destination_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(OSError):
            export_figure(_simple_figure, blocker / "plot.png")
        plt.close("all")


def test_figure_to_base64_is_png() -> None:
    fig = _simple_figure()
    encoded = figure_to_base64(fig)
    plt.close(fig)

    assert base64.b64decode(encoded).startswith(PNG_MAGIC)


def test_table_to_html() -> None:
    html = table_to_html(pd.DataFrame({"a": [1.23456]}, index=["x"]))
    assert "<table" in html
    assert "1.235" in html


class TestRenderReport:
    def test_renders_context(self, tmp_path: Path) -> None:
        template = tmp_path / "tpl.html.j2"
        template.write_text("<h1>{{ title }}</h1>{% for p in predictors %}<li>{{ p }}</li>{% endfor %}{{ table | safe }}")

        out = render_report(
            {"title": "Cars & Co", "predictors": ["wt", "hp"], "table": "<table></table>"},
            template,
            tmp_path / "out" / "report.html",
        )

        text = out.read_text(encoding="utf-8")
        assert "<h1>Cars &amp; Co</h1>" in text
        assert "<li>hp</li>" in text
        assert "<table></table>" in text

    def test_missing_template_writes_nothing(self, tmp_path: Path) -> None:
        output = tmp_path / "report.html"
        with pytest.raises(FileNotFoundError):
            render_report({}, tmp_path / "missing.html.j2", output)
        assert not output.exists()

    def test_undefined_variable_fails(self, tmp_path: Path) -> None:
        template = tmp_path / "tpl.html.j2"
        template.write_text("{{ not_provided }}")
        output = tmp_path / "report.html"

        with pytest.raises(Exception, match="not_provided"):
            render_report({}, template, output)
        assert not output.exists()

    def test_packaged_template_exists(self) -> None:
        assert get_template_path().is_file()
