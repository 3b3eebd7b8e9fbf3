# architecture.py

from tensorflow.keras.layers import Input, Dense
from tensorflow.keras.models import Sequential
from tensorflow.keras.optimizers import Adam

from pitchtype.config import NUM_FEATURES, NUM_PITCH_CLASSES


def build_pitch_model(num_features=NUM_FEATURES, num_classes=NUM_PITCH_CLASSES):
    model = Sequential([
        Input(shape=(num_features,)),
        Dense(250, activation="relu"),
        Dense(175, activation="relu"),
        Dense(150, activation="relu"),
        Dense(num_classes, activation="softmax"),
    ])

    # labels are integer pitch codes, so the sparse form of the loss
    model.compile(
        optimizer=Adam(),
        loss="sparse_categorical_crossentropy",
        metrics=["accuracy"],
    )
    return model
