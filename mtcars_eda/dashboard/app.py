"""Single-page dashboard: scatter of a chosen column against mpg.

Run with ``streamlit run mtcars_eda/dashboard/app.py``.
"""

import pandas as pd
import streamlit as st

from mtcars_eda.dashboard.figures import dashboard_columns, default_index, make_scatter
from mtcars_eda.data import MTCol, MtcarsDataset
from mtcars_eda.utils import PlottingConfig


TARGET = MTCol.TARGET.value


@st.cache_data
def load_table() -> pd.DataFrame:
    return MtcarsDataset.builtin().df


PlottingConfig().apply_global()
st.set_page_config(page_title="mtcars explorer", layout="wide")
st.title("Motor Trend car road tests")

df = load_table()
options = dashboard_columns(df, TARGET)
x_col = st.selectbox("Variable on the x axis", options, index=default_index(options))

st.plotly_chart(make_scatter(df, x_col, TARGET))
