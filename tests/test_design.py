"""Tests for ModelSpec and design-matrix construction."""

import pandas as pd
import pytest

from mtcars_eda.analysis.design import ModelSpec, design_matrix
from mtcars_eda.data import DatasetConfigError


class TestModelSpec:
    def test_of_normalizes_to_tuple(self) -> None:
        spec = ModelSpec.of("mpg", ["wt", "hp", "cyl"])
        assert spec.predictors == ("wt", "hp", "cyl")
        assert str(spec) == "mpg ~ wt + hp + cyl"

    @pytest.mark.parametrize(
        "predictors",
        [[], ["wt", "mpg"], ["wt", "wt"]],
        ids=["empty", "target-as-predictor", "duplicate"],
    )
    def test_invalid_predictors(self, predictors: list[str]) -> None:
        with pytest.raises(DatasetConfigError):
            ModelSpec.of("mpg", predictors)

    def test_unknown_column(self, nominal_dataset) -> None:
        with pytest.raises(DatasetConfigError, match="torque"):
            ModelSpec.of("mpg", ["wt", "torque"]).validate(nominal_dataset.df)

    def test_nominal_predictors(self, nominal_dataset, model_spec) -> None:
        assert model_spec.nominal_predictors(nominal_dataset.df) == ["cyl"]


class TestDesignMatrix:
    def test_nominal_predictor_expanded_to_indicators(self, nominal_dataset, model_spec) -> None:
        x_matrix, y = design_matrix(nominal_dataset.df, model_spec)

        assert list(x_matrix.columns) == ["wt", "hp", "cyl_6", "cyl_8"]
        assert (x_matrix.dtypes == float).all()
        assert x_matrix["cyl_6"].sum() == 7
        assert x_matrix["cyl_8"].sum() == 14
        assert y.name == "mpg"
        assert x_matrix.index.equals(nominal_dataset.df.index)

    def test_numeric_codes_stay_single_column(self, mtcars_dataset, model_spec) -> None:
        x_matrix, _ = design_matrix(mtcars_dataset.df, model_spec)
        assert list(x_matrix.columns) == ["wt", "hp", "cyl"]

    def test_alignment_to_reference_columns(self, nominal_dataset, model_spec) -> None:
        subset = nominal_dataset.df[nominal_dataset.df["cyl"] == 4]
        x_train, _ = design_matrix(nominal_dataset.df, model_spec)
        x_test, _ = design_matrix(subset, model_spec, reference_columns=x_train.columns)

        assert list(x_test.columns) == list(x_train.columns)
        assert (x_test[["cyl_6", "cyl_8"]] == 0).all().all()

    def test_unknown_design_column_raises(self, model_spec) -> None:
        df = pd.DataFrame({"mpg": [20.0, 21.0], "wt": [2.5, 3.0], "hp": [100.0, 110.0], "cyl": ["a", "b"]})
        with pytest.raises(DatasetConfigError, match="cyl_b"):
            design_matrix(df, model_spec, reference_columns=["wt", "hp", "cyl_x"])
