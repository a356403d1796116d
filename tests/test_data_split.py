"""Tests for the stratified train/test split."""

import pandas as pd
import pytest

from mtcars_eda.analysis.data_split import stratified_split


def test_sizes_are_26_and_6(model_split) -> None:
    assert model_split.sizes == (26, 6)


def test_every_row_exactly_once(model_split, nominal_dataset) -> None:
    train_idx, test_idx = set(model_split.train.index), set(model_split.test.index)

    assert train_idx.isdisjoint(test_idx)
    assert train_idx | test_idx == set(nominal_dataset.df.index)
    assert len(model_split.train) + len(model_split.test) == nominal_dataset.n_rows


def test_split_keeps_all_columns(model_split, nominal_dataset) -> None:
    assert list(model_split.train.columns) == list(nominal_dataset.df.columns)


def test_same_seed_same_split(nominal_dataset) -> None:
    first = stratified_split(nominal_dataset.df, "mpg", random_state=123)
    second = stratified_split(nominal_dataset.df, "mpg", random_state=123)
    assert first.test.index.equals(second.test.index)


def test_test_set_spans_target_distribution(model_split) -> None:
    test_strata = model_split.strata.loc[model_split.test.index]
    assert test_strata.nunique() == model_split.strata.nunique()


def test_small_table_still_splits() -> None:
    df = pd.DataFrame({"y": [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0]})
    split = stratified_split(df, "y", train_frac=0.8, random_state=1)
    assert split.sizes == (8, 2)


@pytest.mark.parametrize("train_frac", [0.0, 1.0, -0.2, 1.5])
def test_invalid_train_frac(nominal_dataset, train_frac: float) -> None:
    with pytest.raises(ValueError, match="train_frac"):
        stratified_split(nominal_dataset.df, "mpg", train_frac=train_frac)


def test_missing_target_raises(nominal_dataset) -> None:
    with pytest.raises(KeyError):
        stratified_split(nominal_dataset.df, "not_a_column")


def test_string_index_is_kept(nominal_dataset) -> None:
    df = nominal_dataset.df.copy()
    df.index = pd.Index(df.index.astype(str), dtype="string")

    split = stratified_split(df, "mpg", random_state=123)

    assert split.sizes == (26, 6)
    assert set(split.train.index) | set(split.test.index) == set(df.index)
    assert split.test.index.isin(df.index).all()
