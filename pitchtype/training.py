import logging
import time
from enum import Enum

from pitchtype.config import NUM_TRAINING_EPOCHS, TIMEOUT_BETWEEN_EPOCHS_MS

log = logging.getLogger(__name__)


class TrainingState(Enum):
    IDLE = "idle"
    TRAINING_EPOCH = "training"
    COMPLETE = "complete"


def next_state(state: TrainingState, epoch: int, num_epochs: int):
    """Transition function: Idle -> TrainingEpoch x num_epochs -> Complete.

    Returns (state, epoch). Complete is terminal.
    """
    if state is TrainingState.IDLE:
        if num_epochs <= 0:
            return TrainingState.COMPLETE, 0
        return TrainingState.TRAINING_EPOCH, 1
    if state is TrainingState.TRAINING_EPOCH and epoch < num_epochs:
        return TrainingState.TRAINING_EPOCH, epoch + 1
    return TrainingState.COMPLETE, epoch


class TrainingLoop:
    """Fixed-length training run over the shared model.

    `sleep` is injected so the server can hand in its event loop's sleep
    (and tests a no-op).
    """

    def __init__(
        self,
        model,
        training_data,
        evaluator,
        sleep=time.sleep,
        num_epochs: int = NUM_TRAINING_EPOCHS,
        epoch_delay: float = TIMEOUT_BETWEEN_EPOCHS_MS / 1000,
    ):
        self.model = model
        self.training_data = training_data
        self.evaluator = evaluator
        self.sleep = sleep
        self.num_epochs = num_epochs
        self.epoch_delay = epoch_delay

        self.state = TrainingState.IDLE
        self.epoch = 0
        self.last_result = None

    @property
    def complete(self):
        return self.state is TrainingState.COMPLETE

    def advance(self):
        self.state, self.epoch = next_state(self.state, self.epoch, self.num_epochs)
        return self.state

    def run_epoch(self):
        log.info("Training iteration : %d / %d", self.epoch, self.num_epochs)
        self.model.fit(self.training_data.batches(), epochs=1, verbose=0)
        self.last_result = self.evaluator.evaluate(False)
        log.info("accuracyPerClass %s", self.last_result)
        self.sleep(self.epoch_delay)

    def run(self, on_complete=None):
        if self.state is not TrainingState.IDLE:
            raise RuntimeError(f"Training loop already {self.state.value}")

        while self.advance() is TrainingState.TRAINING_EPOCH:
            self.run_epoch()

        log.info("Training complete after %d epochs", self.epoch)
        if on_complete is not None:
            on_complete()

    def status(self):
        return {
            "state": self.state.value,
            "epoch": self.epoch,
            "num_epochs": self.num_epochs,
            "accuracy_per_class": self.last_result,
        }
