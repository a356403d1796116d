from .paths import get_data_dir, get_dataset_path, get_template_path
from .plotting_config import PlottingConfig


__all__ = [
    "PlottingConfig",
    "get_data_dir",
    "get_dataset_path",
    "get_template_path",
]
