"""Tests for MtcarsDataset: loading, validation and type normalization."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from mtcars_eda.data import DatasetConfigError, MTCol, MtcarsDataset


class TestLoading:
    """Loader behaviour on the packaged table and on user files."""

    def test_builtin_shape_and_index(self, mtcars_dataset: MtcarsDataset) -> None:
        df = mtcars_dataset.df
        assert df.shape == (32, 11)
        assert df.index.name == "model"
        assert "Mazda RX4" in df.index
        assert list(df.columns) == MTCol.base_columns()

    def test_builtin_has_no_missing_values(self, mtcars_dataset: MtcarsDataset) -> None:
        assert int(mtcars_dataset.df.isna().sum().sum()) == 0

    def test_all_columns_numeric_before_normalization(self, mtcars_dataset: MtcarsDataset) -> None:
        assert len(mtcars_dataset.numeric_cols) == 11
        assert mtcars_dataset.nominal_cols.empty

    def test_from_csv_with_unnamed_index_column(self, mtcars_dataset: MtcarsDataset, tmp_path: Path) -> None:
        csv_path = tmp_path / "cars.csv"
        mtcars_dataset.df.rename_axis(None).to_csv(csv_path)

        ds = MtcarsDataset.from_csv(csv_path)

        assert ds.df.shape == (32, 11)
        assert ds.df.index.name == "model"
        pd.testing.assert_frame_equal(ds.df, mtcars_dataset.df, check_names=False)

    def test_from_csv_normalizes_column_names(self, mtcars_dataset: MtcarsDataset, tmp_path: Path) -> None:
        csv_path = tmp_path / "cars.csv"
        mtcars_dataset.df.rename(columns=lambda c: f" {c.upper()} ").to_csv(csv_path)

        ds = MtcarsDataset.from_csv(csv_path)

        assert list(ds.df.columns) == MTCol.base_columns()

    def test_from_csv_semicolon_separator(self, mtcars_dataset: MtcarsDataset, tmp_path: Path) -> None:
        csv_path = tmp_path / "cars.csv"
        mtcars_dataset.df.to_csv(csv_path, sep=";")

        assert MtcarsDataset.from_csv(csv_path, sep=";").n_rows == 32

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            MtcarsDataset.from_csv(tmp_path / "nope.csv")

    def test_missing_column_raises(self, mtcars_dataset: MtcarsDataset, tmp_path: Path) -> None:
        csv_path = tmp_path / "cars.csv"
        mtcars_dataset.df.drop(columns=["qsec", "gear"]).to_csv(csv_path)

        with pytest.raises(DatasetConfigError, match="qsec"):
            MtcarsDataset.from_csv(csv_path)

    def test_non_numeric_column_raises(self, mtcars_dataset: MtcarsDataset) -> None:
        df = mtcars_dataset.df.copy()
        df["hp"] = df["hp"].astype(str) + " hp"

        with pytest.raises(DatasetConfigError, match="hp"):
            MtcarsDataset.validate(df)

    def test_empty_table_raises(self) -> None:
        with pytest.raises(DatasetConfigError):
            MtcarsDataset.validate(pd.DataFrame(columns=MTCol.base_columns()))

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(DatasetConfigError, ValueError)


class TestTypeNormalization:
    """to_nominal and add_cluster_labels mutate in place and keep every row."""

    def test_nominal_columns_become_categorical(self, nominal_dataset: MtcarsDataset) -> None:
        for col in MTCol.nominal_columns():
            assert isinstance(nominal_dataset.df[col].dtype, pd.CategoricalDtype)
        assert list(nominal_dataset.nominal_cols) == MTCol.nominal_columns()
        assert list(nominal_dataset.numeric_cols) == MTCol.numeric_columns()

    def test_categories_are_sorted_codes(self, nominal_dataset: MtcarsDataset) -> None:
        assert list(nominal_dataset.df["cyl"].cat.categories) == [4, 6, 8]
        assert list(nominal_dataset.df["carb"].cat.categories) == [1, 2, 3, 4, 6, 8]
        assert not nominal_dataset.df["gear"].cat.ordered

    def test_recast_is_label_preserving(self, mtcars_dataset: MtcarsDataset, nominal_dataset: MtcarsDataset) -> None:
        for col in MTCol.nominal_columns():
            recast = nominal_dataset.df[col].astype(int)
            pd.testing.assert_series_equal(recast, mtcars_dataset.df[col].astype(int))

    def test_to_nominal_returns_self_and_keeps_rows(self) -> None:
        ds = MtcarsDataset.builtin()
        assert ds.to_nominal(["am"]) is ds
        assert ds.n_rows == 32
        assert isinstance(ds.df["am"].dtype, pd.CategoricalDtype)
        assert not isinstance(ds.df["cyl"].dtype, pd.CategoricalDtype)

    def test_to_nominal_is_idempotent(self) -> None:
        ds = MtcarsDataset.builtin().to_nominal()
        before = ds.df.copy()
        ds.to_nominal()
        pd.testing.assert_frame_equal(ds.df, before)

    def test_to_nominal_empty_list_recasts_nothing(self) -> None:
        ds = MtcarsDataset.builtin()
        ds.to_nominal([])
        assert list(ds.nominal_cols) == []
        assert not isinstance(ds.df["cyl"].dtype, pd.CategoricalDtype)

    def test_to_nominal_unknown_column_raises(self) -> None:
        with pytest.raises(DatasetConfigError, match="not_a_column"):
            MtcarsDataset.builtin().to_nominal(["not_a_column"])

    def test_standardized_frame_skips_categoricals(self, nominal_dataset: MtcarsDataset) -> None:
        scaled = nominal_dataset.df_standardized
        numeric = scaled[nominal_dataset.numeric_cols]
        assert np.allclose(numeric.mean(), 0.0)
        assert np.allclose(numeric.std(ddof=0), 1.0)
        pd.testing.assert_series_equal(scaled["cyl"], nominal_dataset.df["cyl"])

    def test_add_cluster_labels(self) -> None:
        ds = MtcarsDataset.builtin().to_nominal()
        labels = np.arange(32) % 3

        assert ds.add_cluster_labels(labels) is ds
        assert isinstance(ds.df[MTCol.CLUSTER].dtype, pd.CategoricalDtype)
        assert list(ds.df[MTCol.CLUSTER].cat.categories) == [0, 1, 2]
        assert ds.n_rows == 32

    def test_add_cluster_labels_length_mismatch(self) -> None:
        with pytest.raises(ValueError, match="32"):
            MtcarsDataset.builtin().add_cluster_labels([0, 1, 2])


class TestViews:
    """DatasetView construction from the dataset."""

    def test_view_metadata(self, nominal_dataset: MtcarsDataset) -> None:
        view = nominal_dataset.view()

        assert view.target_col == "mpg"
        assert view.numeric_cols == MTCol.numeric_columns()
        assert view.nominal_cols == MTCol.nominal_columns()
        assert view.pretty_by_col["wt"] == "Weight (1000 lbs)"
        assert list(view.features.columns) == MTCol.numeric_columns()

    def test_view_is_frozen(self, nominal_dataset: MtcarsDataset) -> None:
        view = nominal_dataset.view()
        with pytest.raises(AttributeError):
            view.target_col = "wt"  # type: ignore[misc]

    def test_analyzer_view_without_target(self, nominal_dataset: MtcarsDataset) -> None:
        view = nominal_dataset.analyzer_view(include_target=False)
        assert "mpg" not in view.df.columns
        assert view.is_standardized

    def test_invalid_missing_strategy(self, nominal_dataset: MtcarsDataset) -> None:
        with pytest.raises(ValueError, match="missing_strategy"):
            nominal_dataset.view(missing_strategy="mean")  # type: ignore[arg-type]
