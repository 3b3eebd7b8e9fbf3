import logging
import math

import numpy as np
import pandas as pd
import tensorflow as tf

from pitchtype.config import (
    FEATURE_COLUMNS,
    LABEL_COLUMN,
    NUM_PITCH_CLASSES,
    TRAINING_BATCH_SIZE,
)
from pitchtype.normalize import transform_frame

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = FEATURE_COLUMNS + [LABEL_COLUMN]


def load_pitch_frame(path: str) -> pd.DataFrame:
    """Read a pitch CSV and check it against the fixed schema.

    Raises FileNotFoundError for a missing file and ValueError for a missing
    column, an empty or non-numeric cell, or a label outside the pitch classes.
    """
    df = pd.read_csv(path)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")
    if df.empty:
        raise ValueError(f"{path}: no rows")

    for col in REQUIRED_COLUMNS:
        try:
            df[col] = pd.to_numeric(df[col], errors="raise")
        except (TypeError, ValueError) as e:
            raise ValueError(f"{path}: non-numeric value in column '{col}'") from e

    bad_rows = df.index[df[REQUIRED_COLUMNS].isna().any(axis=1)]
    if len(bad_rows):
        # +2: header line and 1-based line numbers
        raise ValueError(f"{path}: empty cells on line {int(bad_rows[0]) + 2}")

    labels = df[LABEL_COLUMN].to_numpy()
    if np.any(labels % 1 != 0) or np.any((labels < 0) | (labels >= NUM_PITCH_CLASSES)):
        raise ValueError(f"{path}: '{LABEL_COLUMN}' must be an integer in [0, {NUM_PITCH_CLASSES - 1}]")

    return df[REQUIRED_COLUMNS]


class PitchDataset:
    """Normalized pitch rows, served as a restartable stream of (xs, ys) batches.

    Rows are read and scaled once, when the dataset is built. Every call to
    `batches()` (or every `for` loop over the dataset) starts a fresh pass.
    """

    def __init__(self, xs, ys, batch_size, shuffle=False, name="pitches"):
        self.xs = xs
        self.ys = ys
        self.batch_size = batch_size
        self.shuffle = shuffle
        self.name = name

    @classmethod
    def from_csv(cls, path, batch_size=None, shuffle=False):
        df = load_pitch_frame(path)
        xs, ys = transform_frame(df)
        log.info("Loaded %d rows from %s", len(ys), path)
        # batch_size=None -> one batch holding the whole file
        return cls(xs, ys, batch_size or len(ys), shuffle=shuffle, name=path)

    @property
    def num_rows(self):
        return len(self.ys)

    def batches(self) -> tf.data.Dataset:
        ds = tf.data.Dataset.from_tensor_slices((self.xs, self.ys))
        if self.shuffle:
            # buffer spans the whole dataset
            ds = ds.shuffle(self.num_rows)
        return ds.batch(self.batch_size)

    def __iter__(self):
        return iter(self.batches())

    def __len__(self):
        return math.ceil(self.num_rows / self.batch_size)


def training_dataset(path, batch_size=TRAINING_BATCH_SIZE):
    return PitchDataset.from_csv(path, batch_size=batch_size, shuffle=True)


def validation_dataset(path):
    # Row order must be kept: the evaluator relies on contiguous class blocks.
    return PitchDataset.from_csv(path, batch_size=None, shuffle=False)
