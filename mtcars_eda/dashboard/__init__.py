"""Interactive dashboard (``streamlit run mtcars_eda/dashboard/app.py``)."""

from .figures import dashboard_columns, make_scatter


__all__ = ["dashboard_columns", "make_scatter"]
