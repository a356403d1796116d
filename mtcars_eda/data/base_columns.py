"""Base column definitions and metadata structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class ColumnMetadata:
    """Metadata for a dataset column.

    Attributes:
        cleaned_name: Standardized column name used in DataFrames.
        dtype: Expected pandas data type at load time as a string.
        pretty_name: Human-readable name for use in plots and reports.
        is_nominal: Whether the column holds unordered category codes.
    """

    original_name: str
    """Column name as it appears in the raw CSV file."""
    cleaned_name: str
    dtype: str
    pretty_name: str
    is_nominal: bool = False


class BaseColumn(StrEnum):
    """Base class for dataset column enums.

    All derived column enums must define a TARGET member to specify
    the target variable for the dataset.

    Subclasses must implement:
    - metadata(): Return ColumnMetadata for each enum member
    - base_columns(): Return the columns every input table must provide
    """

    TARGET: str

    def metadata(self) -> ColumnMetadata:
        """Get metadata for this column.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement metadata() method")

    @classmethod
    def base_columns(cls) -> list[str]:
        """Get the columns every input table must provide.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{cls.__name__} must implement base_columns() method")

    @classmethod
    def nominal_columns(cls) -> list[str]:
        """Get the base columns that hold category codes."""
        return [col for col in cls.base_columns() if cls(col).metadata().is_nominal]

    @classmethod
    def numeric_columns(cls) -> list[str]:
        """Get the base columns that stay continuous after type normalization."""
        return [col for col in cls.base_columns() if not cls(col).metadata().is_nominal]

    @classmethod
    def feature_columns(cls, *, exclude_target: bool = False) -> list[str]:
        """Get all base columns, optionally without the target."""
        features = cls.base_columns()
        if exclude_target:
            features = list(filter(lambda f: f != cls.TARGET, features))
        return features

    @property
    def pretty_name(self) -> str:
        """Get the human-readable name for plots and reports."""
        return self.metadata().pretty_name

    @property
    def original_name(self) -> str:
        """Get the original column name from the CSV file."""
        return self.metadata().original_name

    @property
    def is_nominal(self) -> bool:
        return self.metadata().is_nominal
