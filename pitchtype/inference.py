import numpy as np

from pitchtype.config import NUM_FEATURES, NUM_PITCH_CLASSES
from pitchtype.labels import pitch_from_class_num

# Returned when no class scores above 0 (e.g. a degenerate model).
# Index 7 has no label, so it maps to "Unknown".
NO_PREDICTION = NUM_PITCH_CLASSES


def pitch_from_probabilities(probs) -> str:
    """Label of the first class whose probability is strictly the largest.

    The running max starts at 0, so an all non-positive row is "Unknown".
    """
    max_value = 0
    predicted_pitch = NO_PREDICTION
    for i in range(NUM_PITCH_CLASSES):
        if probs[i] > max_value:
            predicted_pitch = i
            max_value = probs[i]
    return pitch_from_class_num(predicted_pitch)


def predict_sample(model, sample) -> str:
    """Predict the pitch type of one already-normalized feature vector."""
    x = np.asarray(sample, dtype=np.float32)
    if x.ndim != 1 or x.shape[0] != NUM_FEATURES:
        raise ValueError(f"Expected a flat sample of {NUM_FEATURES} features, got shape {x.shape}")

    # Direct call instead of model.predict(): safe to run while fit() is
    # going on in the training task. Weights may be mid-update.
    probs = np.asarray(model(x[np.newaxis, :], training=False))[0]
    return pitch_from_probabilities(probs)
