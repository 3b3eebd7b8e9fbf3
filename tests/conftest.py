import numpy as np
import pandas as pd
import pytest

from pitchtype.config import FEATURE_COLUMNS, LABEL_COLUMN, NUM_PITCH_CLASSES
from pitchtype.normalize import FEATURE_BOUNDS


def make_pitch_frame(rows_per_class, seed=0):
    """Synthetic pitch rows inside the training bounds, sorted by pitch_code."""
    rng = np.random.default_rng(seed)
    n = rows_per_class * NUM_PITCH_CLASSES
    data = {}
    for col in FEATURE_COLUMNS:
        lo, hi = FEATURE_BOUNDS[col]
        if lo is None:
            data[col] = rng.integers(0, 2, size=n)
        else:
            data[col] = rng.uniform(lo, hi, size=n)
    data[LABEL_COLUMN] = np.repeat(np.arange(NUM_PITCH_CLASSES), rows_per_class)
    return pd.DataFrame(data)


def write_pitch_csv(path, rows_per_class, seed=0):
    make_pitch_frame(rows_per_class, seed=seed).to_csv(path, index=False)
    return str(path)


@pytest.fixture
def train_csv(tmp_path):
    return write_pitch_csv(tmp_path / "pitch_type_training_data.csv", rows_per_class=10)


@pytest.fixture
def test_csv(tmp_path):
    return write_pitch_csv(tmp_path / "pitch_type_test_data.csv", rows_per_class=3, seed=1)


class FixedOutputModel:
    """Stands in for the Keras model; every row gets the same probabilities."""

    def __init__(self, probs):
        self.probs = np.asarray(probs, dtype=np.float32)
        self.fit_calls = 0

    def __call__(self, x, training=False):
        return np.tile(self.probs, (len(x), 1))

    def predict(self, x, verbose=0):
        return self(np.asarray(x))

    def fit(self, data, epochs=1, verbose=0):
        self.fit_calls += 1
