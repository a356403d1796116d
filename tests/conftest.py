"""Test configuration for the mtcars toolbox."""

from pathlib import Path
import sys

import matplotlib
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(scope="session")
def mtcars_dataset():
    """Built-in table as loaded (integer codes, no type normalization)."""
    from mtcars_eda.data import MtcarsDataset

    return MtcarsDataset.builtin()


@pytest.fixture(scope="session")
def nominal_dataset():
    """Built-in table with ``cyl, vs, am, gear, carb`` recast to categoricals."""
    from mtcars_eda.data import MtcarsDataset

    return MtcarsDataset.builtin().to_nominal()


@pytest.fixture(scope="session")
def clustered_dataset():
    """Nominal table with the k-means (k=3, seed 123) cluster column appended."""
    from mtcars_eda.data import MtcarsDataset

    ds = MtcarsDataset.builtin().to_nominal()
    clusters = ds.make_kmeans_clusterer(n_clusters=3, random_state=123).fit().result()
    return ds.add_cluster_labels(clusters.labels)


@pytest.fixture(scope="session")
def model_spec():
    from mtcars_eda.analysis import ModelSpec

    return ModelSpec.of("mpg", ["wt", "hp", "cyl"])


@pytest.fixture(scope="session")
def model_split(nominal_dataset):
    """Stratified 26/6 split of the nominal table (seed 123)."""
    from mtcars_eda.analysis import stratified_split

    return stratified_split(nominal_dataset.df, "mpg", train_frac=0.8, random_state=123)
