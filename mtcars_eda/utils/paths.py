from pathlib import Path
from typing import Literal


__all__ = ["get_data_dir", "get_dataset_path", "get_template_path"]


_DATASET_MAP: dict[str, str] = {
    "mtcars": "mtcars.csv",
}


def get_data_dir() -> Path:
    """Get the path to the packaged data directory.

    Returns:
        Path to the data directory
    """
    data_dir = (Path(__file__).parents[1] / "_data").resolve()
    if not data_dir.exists():
        raise FileNotFoundError(f"Data directory not found at {data_dir}")
    return data_dir


def get_dataset_path(filename: Literal["mtcars"] | str) -> Path:  # noqa: PYI051
    """Get the full path to a dataset file in the data directory.

    Args:
        filename: Key to known dataset or custom filename

    Returns:
        Full path to the dataset file inside the package data directory

    Supported: mtcars.csv
    """
    ds_path = get_data_dir() / _DATASET_MAP.get(filename, filename)
    if not ds_path.exists():
        raise FileNotFoundError(f"Dataset file '{filename}' not found at {ds_path}")
    return ds_path


def get_template_path(name: str = "report.html.j2") -> Path:
    """Get the path to a packaged report template."""
    return (Path(__file__).parents[1] / "reporting" / "templates" / name).resolve()
