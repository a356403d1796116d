"""Streamlit-free helpers of the dashboard, importable and testable on their own."""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


DEFAULT_X_COL = "wt"


def dashboard_columns(df: pd.DataFrame, target: str) -> list[str]:
    """Columns offered in the selector: every column of the table except the target."""
    if target not in df.columns:
        raise KeyError(f"Target column '{target}' not found")
    return [str(col) for col in df.columns if col != target]


def default_index(options: list[str], preferred: str = DEFAULT_X_COL) -> int:
    return options.index(preferred) if preferred in options else 0


def make_scatter(df: pd.DataFrame, x_col: str, target: str) -> go.Figure:
    """Interactive scatter of ``target`` against ``x_col``, one point per row with hover names.

    Raises:
        KeyError: If either column is missing.
    """
    missing = [col for col in (x_col, target) if col not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")
    frame = df.reset_index()
    hover = frame.columns[0] if df.index.name else None
    fig = px.scatter(
        frame,
        x=x_col,
        y=target,
        hover_name=hover,
        title=f"{target} vs {x_col}",
    )
    fig.update_traces(marker={"size": 10, "opacity": 0.8})
    return fig
