"""Tests for DatasetProfiler."""

import pandas as pd
import pytest

from mtcars_eda.analysis.profiler import DatasetProfiler
from mtcars_eda.data.views import DatasetView


def test_profile_of_builtin_table(mtcars_dataset) -> None:
    profile = mtcars_dataset.make_profiler().fit().result()

    assert profile.shape == (32, 11)
    assert profile.n_missing == 0
    assert len(profile.head) == 6
    assert list(profile.numeric_summary.index) == ["Min.", "1st Qu.", "Median", "Mean", "3rd Qu.", "Max."]
    assert profile.numeric_summary.loc["Min.", "mpg"] == pytest.approx(10.4)
    assert profile.numeric_summary.loc["Max.", "mpg"] == pytest.approx(33.9)
    assert profile.numeric_summary.loc["Mean", "mpg"] == pytest.approx(20.090625)
    assert profile.numeric_summary.loc["Median", "wt"] == pytest.approx(3.325)


def test_structure_lists_every_column(mtcars_dataset) -> None:
    structure = mtcars_dataset.make_profiler().fit().result().structure

    assert list(structure.columns) == ["column", "dtype", "n_unique", "sample"]
    assert len(structure) == 11
    cyl = structure.set_index("column").loc["cyl"]
    assert cyl["n_unique"] == 3
    assert cyl["sample"].startswith("6 6 4")


def test_profile_does_not_modify_table(mtcars_dataset) -> None:
    before = mtcars_dataset.df.copy()
    mtcars_dataset.make_profiler().fit().result()
    pd.testing.assert_frame_equal(mtcars_dataset.df, before)


def test_level_counts_for_categoricals(nominal_dataset) -> None:
    profile = nominal_dataset.make_profiler().fit().result()

    assert set(profile.level_counts) == {"cyl", "vs", "am", "gear", "carb"}
    assert profile.level_counts["cyl"].to_dict() == {4: 11, 6: 7, 8: 14}
    assert "cyl" not in profile.numeric_summary.columns


def test_missing_values_are_counted() -> None:
    df = pd.DataFrame({"a": [1.0, None, 3.0], "b": [None, None, 1.0]})
    view = DatasetView(df=df, pretty_by_col={"a": "A", "b": "B"}, numeric_cols=["a", "b"])

    assert DatasetProfiler(view).fit().result().n_missing == 3


def test_result_before_fit_raises(mtcars_dataset) -> None:
    with pytest.raises(ValueError, match="fit"):
        mtcars_dataset.make_profiler().result()


def test_print_report(mtcars_dataset, capsys) -> None:
    mtcars_dataset.make_profiler().fit().result().print_report()
    out = capsys.readouterr().out

    assert "First 6 rows:" in out
    assert "Mazda RX4" in out
    assert "Structure: 32 obs. of 11 variables" in out
    assert "Missing values: 0" in out
