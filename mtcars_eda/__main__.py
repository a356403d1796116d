"""``python -m mtcars_eda``: run the full analysis with the default configuration."""

import logging

from mtcars_eda.pipeline import run_pipeline
from mtcars_eda.utils.config import PipelineConfig


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_pipeline(PipelineConfig())


if __name__ == "__main__":
    main()
