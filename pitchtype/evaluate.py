import logging

import numpy as np
from sklearn.metrics import classification_report, confusion_matrix

from pitchtype.config import NUM_PITCH_CLASSES
from pitchtype.labels import pitch_from_class_num

log = logging.getLogger(__name__)


def calc_pitch_class_eval(pitch_index, class_size, values):
    """Mean probability the model gives to the true class, for one pitch class.

    `values` is the row-major flattened (rows, NUM_PITCH_CLASSES) output of a
    validation batch whose rows are sorted by class in equal blocks of
    `class_size`. Class i's rows start at row i * class_size, and its own
    probability sits in column i of each of them.

    Nothing checks that layout. Uneven or unsorted classes give a wrong
    number, not an error.
    """
    values = np.asarray(values).ravel()
    index = (pitch_index * class_size * NUM_PITCH_CLASSES) + pitch_index
    stop = index + class_size * NUM_PITCH_CLASSES
    return float(np.sum(values[index:stop:NUM_PITCH_CLASSES]) / class_size)


class Evaluator:
    """Per-class accuracy of the shared model on the validation datasets."""

    def __init__(self, model, training_data, test_data=None):
        self.model = model
        self.training_data = training_data
        self.test_data = test_data

    def _class_evals(self, dataset):
        class_size = dataset.num_rows // NUM_PITCH_CLASSES
        evals = {}
        for xs, _ in dataset:
            values = self.model.predict(xs, verbose=0)
            for i in range(NUM_PITCH_CLASSES):
                evals[pitch_from_class_num(i)] = calc_pitch_class_eval(i, class_size, values)
        return evals

    def evaluate(self, use_test_data=False):
        """Return {pitch label: {"training": acc, "validation": acc}}.

        "validation" is only filled in when use_test_data is set and the
        evaluator was built with a test dataset.
        """
        results = {}
        for pitch, acc in self._class_evals(self.training_data).items():
            results[pitch] = {"training": acc}

        if use_test_data and self.test_data is not None:
            for pitch, acc in self._class_evals(self.test_data).items():
                results[pitch]["validation"] = acc

        return results


def classification_summary(model, dataset):
    """Confusion matrix and sklearn classification report over a whole dataset."""
    probs = model.predict(dataset.xs, verbose=0)
    y_pred = np.argmax(probs, axis=1)
    labels = list(range(NUM_PITCH_CLASSES))

    cm = confusion_matrix(dataset.ys, y_pred, labels=labels)
    report = classification_report(
        dataset.ys,
        y_pred,
        labels=labels,
        target_names=[pitch_from_class_num(i) for i in labels],
        zero_division=0,
    )
    return cm, report
