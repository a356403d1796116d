"""Tests for the dashboard helpers and the streamlit page."""

from pathlib import Path

import plotly.graph_objects as go
import pytest
from streamlit.testing.v1 import AppTest

from mtcars_eda.dashboard import dashboard_columns, make_scatter
from mtcars_eda.dashboard.figures import default_index


APP_PATH = Path(__file__).resolve().parents[1] / "mtcars_eda" / "dashboard" / "app.py"


def test_dashboard_columns_exclude_target(mtcars_dataset) -> None:
    options = dashboard_columns(mtcars_dataset.df, "mpg")

    assert "mpg" not in options
    assert len(options) == 10
    assert options[default_index(options)] == "wt"


def test_dashboard_columns_unknown_target(mtcars_dataset) -> None:
    with pytest.raises(KeyError):
        dashboard_columns(mtcars_dataset.df, "kpl")


def test_make_scatter(mtcars_dataset) -> None:
    fig = make_scatter(mtcars_dataset.df, "wt", "mpg")

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert len(fig.data[0].x) == 32
    assert fig.layout.xaxis.title.text == "wt"
    assert fig.layout.yaxis.title.text == "mpg"


def test_make_scatter_does_not_modify_table(mtcars_dataset) -> None:
    before = mtcars_dataset.df.copy()
    make_scatter(mtcars_dataset.df, "hp", "mpg")
    assert mtcars_dataset.df.equals(before)


def test_make_scatter_unknown_column(mtcars_dataset) -> None:
    with pytest.raises(KeyError, match="torque"):
        make_scatter(mtcars_dataset.df, "torque", "mpg")


def test_app_defaults_to_weight_and_redraws_on_selection() -> None:
    at = AppTest.from_file(str(APP_PATH), default_timeout=60).run()

    assert not at.exception
    assert at.selectbox[0].value == "wt"
    assert "mpg" not in at.selectbox[0].options

    at.selectbox[0].select("hp").run()

    assert not at.exception
    assert at.selectbox[0].value == "hp"
