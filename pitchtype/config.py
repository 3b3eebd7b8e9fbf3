import logging
import os

# Absolute path to repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

DATA_DIR = os.path.join(ROOT, "data")
TRAIN_DATA_PATH = os.path.join(DATA_DIR, "pitch_type_training_data.csv")
TEST_DATA_PATH = os.path.join(DATA_DIR, "pitch_type_test_data.csv")

DEFAULT_PORT = 8001
PORT = int(os.environ.get("PORT", DEFAULT_PORT))

# Dataset shape
FEATURE_COLUMNS = [
    "vx0", "vy0", "vz0", "ax", "ay", "az",
    "start_speed", "left_handed_pitcher",
]
LABEL_COLUMN = "pitch_code"
NUM_FEATURES = len(FEATURE_COLUMNS)
NUM_PITCH_CLASSES = 7

# Training
TRAINING_BATCH_SIZE = 100
NUM_TRAINING_EPOCHS = 10
TIMEOUT_BETWEEN_EPOCHS_MS = 500

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)
