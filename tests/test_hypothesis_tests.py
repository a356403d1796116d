"""Tests for one-way ANOVA and the chi-square test of independence."""

import numpy as np
import pandas as pd
import pytest

from mtcars_eda.analysis.hypothesis_tests import anova_table, chi_square_independence, one_way_anova


class TestOneWayAnova:
    def test_mpg_by_cyl(self, nominal_dataset) -> None:
        result = one_way_anova(nominal_dataset.df, "mpg", "cyl")

        assert result.df_between == 2
        assert result.df_within == 29
        assert result.f_statistic == pytest.approx(39.70, abs=0.01)
        assert result.p_value < 0.05
        assert result.rejects_equal_means()
        assert result.group_sizes.to_dict() == {4: 11, 6: 7, 8: 14}
        assert result.group_means[4] == pytest.approx(26.6636, abs=1e-3)

    def test_agrees_with_anova_table(self, nominal_dataset) -> None:
        result = one_way_anova(nominal_dataset.df, "mpg", "cyl")
        table = anova_table(nominal_dataset.df, "mpg", "cyl")

        assert table.loc["cyl", "F"] == pytest.approx(result.f_statistic)
        assert table.loc["cyl", "PR(>F)"] == pytest.approx(result.p_value)
        assert table.loc["Residual", "df"] == result.df_within

    def test_unequal_group_sizes(self) -> None:
        df = pd.DataFrame({"y": [1.0, 2.0, 3.0, 10.0, 11.0], "g": ["a", "a", "a", "b", "b"]})
        result = one_way_anova(df, "y", "g")

        assert result.df_between == 1
        assert result.df_within == 3
        assert result.p_value < 0.05

    def test_single_group_raises(self) -> None:
        df = pd.DataFrame({"y": [1.0, 2.0, 3.0], "g": ["a", "a", "a"]})
        with pytest.raises(ValueError, match="two non-empty groups"):
            one_way_anova(df, "y", "g")

    def test_empty_category_levels_are_ignored(self) -> None:
        df = pd.DataFrame(
            {"y": [1.0, 2.0, 5.0, 6.0], "g": pd.Categorical(["a", "a", "b", "b"], categories=["a", "b", "c"])},
        )
        assert one_way_anova(df, "y", "g").df_between == 1

    def test_missing_column_raises(self, nominal_dataset) -> None:
        with pytest.raises(KeyError):
            one_way_anova(nominal_dataset.df, "mpg", "nope")

    def test_str_report(self, nominal_dataset) -> None:
        text = str(one_way_anova(nominal_dataset.df, "mpg", "cyl"))
        assert "One-way ANOVA: mpg ~ cyl" in text
        assert "F(2, 29)" in text


class TestChiSquare:
    def test_cyl_by_am(self, nominal_dataset) -> None:
        result = chi_square_independence(nominal_dataset.df, "cyl", "am")

        assert result.dof == 2
        assert result.statistic == pytest.approx(8.7407, abs=1e-3)
        assert result.p_value == pytest.approx(0.01265, abs=1e-4)
        assert not result.correction
        assert result.contingency.to_numpy().sum() == 32

    def test_small_expected_counts_are_flagged(self, nominal_dataset, caplog) -> None:
        with caplog.at_level("WARNING"):
            result = chi_square_independence(nominal_dataset.df, "cyl", "am")

        assert result.approximation_warning
        assert result.low_expected_cells == 3
        assert "expected count" in caplog.text
        assert "Warning" in str(result)

    def test_expected_counts(self, nominal_dataset) -> None:
        result = chi_square_independence(nominal_dataset.df, "cyl", "am")
        assert result.expected.loc[8, 0] == pytest.approx(14 * 19 / 32)

    def test_yates_correction_for_2x2(self, nominal_dataset) -> None:
        result = chi_square_independence(nominal_dataset.df, "vs", "am")
        assert result.correction
        assert result.dof == 1

    def test_large_counts_not_flagged(self) -> None:
        rng = np.random.default_rng(0)
        df = pd.DataFrame({"a": rng.choice(["x", "y"], 400), "b": rng.choice(["u", "v", "w"], 400)})
        result = chi_square_independence(df, "a", "b")

        assert not result.approximation_warning
        assert 0.0 <= result.p_value <= 1.0

    def test_single_level_raises(self) -> None:
        df = pd.DataFrame({"a": ["x"] * 4, "b": ["u", "v", "u", "v"]})
        with pytest.raises(ValueError, match="2x2"):
            chi_square_independence(df, "a", "b")

    def test_input_is_not_modified(self, nominal_dataset) -> None:
        before = nominal_dataset.df.copy()
        chi_square_independence(nominal_dataset.df, "cyl", "am")
        pd.testing.assert_frame_equal(nominal_dataset.df, before)
