"""Data module for dataset classes."""

from .base_dataset import BaseDataset, DatasetConfigError
from .mtcars_columns import MtcarsColumn as MTCol
from .mtcars_dataset import MtcarsDataset
from .views import DatasetView


__all__ = ["BaseDataset", "DatasetConfigError", "DatasetView", "MTCol", "MtcarsDataset"]
