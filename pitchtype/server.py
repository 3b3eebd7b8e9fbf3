"""Socket.IO server: trains the pitch type model and answers predictions meanwhile.

Events
  in   predictSample     [8 normalized floats]
  out  predictResult     pitch label, broadcast to every client
  out  trainingComplete  True, once, after the last epoch
"""
import argparse
import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO

from pitchtype.architecture import build_pitch_model
from pitchtype.config import PORT, TEST_DATA_PATH, TRAIN_DATA_PATH, configure_logging
from pitchtype.dataset import training_dataset, validation_dataset
from pitchtype.evaluate import Evaluator, classification_summary
from pitchtype.inference import predict_sample
from pitchtype.training import TrainingLoop

log = logging.getLogger(__name__)


def create_app(model, training_loop):
    """Build the Flask app and its Socket.IO server around one shared model.

    Predictions read the same model the training loop is fitting, without a
    lock; a request that lands mid-epoch sees whatever weights are current.
    """
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode="threading")

    @app.get("/api/status")
    def api_status():
        return jsonify(training_loop.status())

    @socketio.on("predictSample")
    def on_predict_sample(sample):
        try:
            result = predict_sample(model, sample)
        except ValueError:
            log.exception("Bad predictSample payload: %r", sample)
            raise
        socketio.emit("predictResult", result)

    return app, socketio


def start_training(socketio, training_loop):
    """Run the training loop as a background task; broadcast when it ends."""

    def on_complete():
        socketio.emit("trainingComplete", True)

        evaluator = training_loop.evaluator
        if evaluator.test_data is not None:
            log.info("accuracyPerClass (final) %s", evaluator.evaluate(True))
            cm, report = classification_summary(training_loop.model, evaluator.test_data)
            log.info("Confusion matrix (test data, rows=true, cols=pred):\n%s", cm)
            log.info("Classification report (test data):\n%s", report)

    return socketio.start_background_task(training_loop.run, on_complete)


def build_training_loop(train_path, test_path):
    """Load the datasets and model in a fixed order and wire them together.

    Missing or malformed CSV files raise here, before the server starts.
    """
    training_data = training_dataset(train_path)
    training_validation_data = validation_dataset(train_path)
    test_validation_data = validation_dataset(test_path)

    model = build_pitch_model()
    evaluator = Evaluator(model, training_validation_data, test_validation_data)
    return TrainingLoop(model, training_data, evaluator)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Train the pitch type model and serve live predictions over Socket.IO."
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=PORT, help="defaults to $PORT or 8001")
    parser.add_argument("--train-data", default=TRAIN_DATA_PATH)
    parser.add_argument("--test-data", default=TEST_DATA_PATH)
    return parser.parse_args(argv)


def main(argv=None):
    configure_logging()
    args = parse_args(argv)

    log.info("Loading datasets/model...")
    training_loop = build_training_loop(args.train_data, args.test_data)

    app, socketio = create_app(training_loop.model, training_loop)
    training_loop.sleep = socketio.sleep

    start_training(socketio, training_loop)

    log.info("  > Running socket on port: %d", args.port)
    socketio.run(app, host=args.host, port=args.port, allow_unsafe_werkzeug=True)


if __name__ == "__main__":
    main()
