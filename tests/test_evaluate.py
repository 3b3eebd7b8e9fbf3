import numpy as np
import pytest

from conftest import FixedOutputModel
from pitchtype.architecture import build_pitch_model
from pitchtype.dataset import validation_dataset
from pitchtype.evaluate import Evaluator, calc_pitch_class_eval, classification_summary
from pitchtype.labels import PITCH_NAMES

NUM_CLASSES = 7


def perfect_outputs(class_size):
    """Flat output buffer where every row puts all its mass on its own class."""
    values = np.zeros((class_size * NUM_CLASSES, NUM_CLASSES))
    for i in range(NUM_CLASSES):
        values[i * class_size:(i + 1) * class_size, i] = 1.0
    return values.ravel()


@pytest.mark.parametrize("class_size", [1, 3, 100, 1000])
def test_stride_reads_own_class_column(class_size):
    values = perfect_outputs(class_size)
    assert len(values) == class_size * NUM_CLASSES ** 2
    for i in range(NUM_CLASSES):
        assert calc_pitch_class_eval(i, class_size, values) == 1.0


def test_stride_averages_over_class_block():
    class_size = 2
    values = np.zeros((class_size * NUM_CLASSES, NUM_CLASSES))
    # class 4 rows: 8 and 9
    values[8, 4] = 0.25
    values[9, 4] = 0.75
    values[9, 5] = 1.0
    assert calc_pitch_class_eval(4, class_size, values.ravel()) == 0.5
    assert calc_pitch_class_eval(5, class_size, values.ravel()) == 0.0


def test_stride_accepts_flat_list():
    values = perfect_outputs(2).tolist()
    assert calc_pitch_class_eval(6, 2, values) == 1.0


def test_evaluate_training_only(train_csv):
    evaluator = Evaluator(build_pitch_model(), validation_dataset(train_csv))

    results = evaluator.evaluate(False)

    assert set(results) == set(PITCH_NAMES.values())
    for pitch, accs in results.items():
        assert set(accs) == {"training"}
        assert 0.0 <= accs["training"] <= 1.0


def test_evaluate_with_test_data(train_csv, test_csv):
    probs = [0.05, 0.1, 0.15, 0.2, 0.25, 0.15, 0.1]
    evaluator = Evaluator(
        FixedOutputModel(probs), validation_dataset(train_csv), validation_dataset(test_csv)
    )

    results = evaluator.evaluate(True)

    assert len(results) == 7
    for i, pitch in PITCH_NAMES.items():
        assert results[pitch]["training"] == pytest.approx(probs[i])
        assert results[pitch]["validation"] == pytest.approx(probs[i])


def test_evaluate_test_data_without_dataset(train_csv):
    evaluator = Evaluator(FixedOutputModel([1.0 / 7] * 7), validation_dataset(train_csv))

    results = evaluator.evaluate(True)

    assert len(results) == 7
    for accs in results.values():
        assert set(accs) == {"training"}


def test_classification_summary(test_csv):
    model = FixedOutputModel([0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0])

    cm, report = classification_summary(model, validation_dataset(test_csv))

    assert cm.shape == (7, 7)
    assert list(cm[:, 3]) == [3] * 7
    assert cm.sum() == 21
    assert "Fastball (cutter)" in report
