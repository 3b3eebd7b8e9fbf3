import numpy as np

from pitchtype.config import FEATURE_COLUMNS, LABEL_COLUMN

# Min/max bounds taken once from the training distribution. Test data and
# live samples are scaled with the same numbers; never refit these.
FEATURE_BOUNDS = {
    "vx0": (-18.885, 18.065),
    "vy0": (-152.463, -86.374),
    "vz0": (-15.5146078412997, 9.974),
    "ax": (-48.0287647107959, 30.592),
    "ay": (9.397, 49.18),
    "az": (-49.339, 2.95522851438373),
    "start_speed": (59, 104.4),
    # already 0/1
    "left_handed_pitcher": (None, None),
}


def normalize(value, min_value=None, max_value=None):
    """Linearly rescale value so min_value -> 0 and max_value -> 1.

    Values outside the bounds are not clamped. If either bound is missing
    the value is returned as is.
    """
    if min_value is None or max_value is None:
        return value
    return (value - min_value) / (max_value - min_value)


def csv_transform(row):
    """Map one raw CSV row (dict-like) to (features, label)."""
    values = [normalize(row[col], *FEATURE_BOUNDS[col]) for col in FEATURE_COLUMNS]
    return values, row[LABEL_COLUMN]


def transform_frame(df):
    """Vectorized csv_transform over a whole frame.

    Returns:
      xs: float32 array (n_rows, NUM_FEATURES)
      ys: int32 array (n_rows,)
    """
    cols = [normalize(df[col].to_numpy(dtype=np.float64), *FEATURE_BOUNDS[col])
            for col in FEATURE_COLUMNS]
    xs = np.stack(cols, axis=1).astype(np.float32)
    ys = df[LABEL_COLUMN].to_numpy().astype(np.int32)
    return xs, ys
