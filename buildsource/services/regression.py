"""
Regression Estimator for BuildSource.

Maps a 4-feature vector (area, floors, quality index, material count)
to a predicted total construction cost.

Architecture:
- CostRegressor defines the train/predict contract
- MLPCostRegressor: scikit-learn MLP, hidden layers 64 -> 32 (ReLU),
  Adam, mini-batches of 32, at most 100 epochs
- LinearCostRegressor: ordinary least squares, same contract
- Inputs and targets are standard-scaled so the network trains on
  unit-variance data; predictions come back in rupees

Each train() call refits from scratch. Nothing is persisted.
"""

import math
import time
import warnings
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import structlog
from sklearn.compose import TransformedTargetRegressor
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LinearRegression
from sklearn.metrics import mean_squared_error
from sklearn.neural_network import MLPRegressor
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from config.errors import InsufficientDataError, ValidationError
from models.project import TrainingExample

logger = structlog.get_logger(__name__)

FEATURE_COUNT = 4
FEATURE_NAMES = ("area", "floors", "quality_index", "material_count")

DEFAULT_HIDDEN_LAYERS = (64, 32)
DEFAULT_EPOCHS = 100
DEFAULT_BATCH_SIZE = 32
DEFAULT_LEARNING_RATE = 0.01

# Epoch interval for loss progress logging
LOSS_LOG_INTERVAL = 20


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def examples_to_arrays(examples: Sequence[TrainingExample]) -> Tuple[np.ndarray, np.ndarray]:
    """Stack training examples into (X, y) arrays.

    Raises:
        InsufficientDataError: If there are no examples or any row is malformed.
    """
    examples = list(examples or [])
    if not examples:
        raise InsufficientDataError("No training examples available", sample_count=0)

    rows: List[List[float]] = []
    targets: List[float] = []
    for i, example in enumerate(examples):
        features = getattr(example, "features", None)
        target = getattr(example, "target", None)
        if (
            features is None
            or len(features) != FEATURE_COUNT
            or not all(_is_finite_number(v) for v in features)
            or not _is_finite_number(target)
        ):
            raise InsufficientDataError(
                f"Malformed training example at index {i}",
                sample_count=len(examples),
                details={"index": i}
            )
        rows.append([float(v) for v in features])
        targets.append(float(target))

    return np.asarray(rows, dtype=float), np.asarray(targets, dtype=float)


def feature_row(features: Sequence[float]) -> np.ndarray:
    """Validate a single feature vector and shape it as a 1x4 array.

    Raises:
        ValidationError: If the vector is not exactly four finite numbers.
    """
    if features is None or len(features) != FEATURE_COUNT:
        raise ValidationError(
            f"Expected {FEATURE_COUNT} features ({', '.join(FEATURE_NAMES)})",
            field="features"
        )
    if not all(_is_finite_number(v) for v in features):
        raise ValidationError("Features must be finite numbers", field="features")
    return np.asarray([[float(v) for v in features]], dtype=float)


class CostRegressor(ABC):
    """Interchangeable scalar cost estimator.

    Subclasses only decide which scikit-learn estimator gets fitted;
    validation, logging and the trained/untrained state live here.
    """

    kind = "base"

    def __init__(self):
        self._model = None
        self.sample_count = 0
        self.training_rmse: Optional[float] = None
        self.training_duration_ms: Optional[int] = None

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @abstractmethod
    def _build_model(self):
        """Return an unfitted scikit-learn regressor."""

    def _fit(self, model, X: np.ndarray, y: np.ndarray) -> None:
        model.fit(X, y)

    def train(self, examples: Sequence[TrainingExample]) -> None:
        """Fit from scratch on the given examples, discarding prior weights.

        Raises:
            InsufficientDataError: If the examples are empty or malformed.
        """
        X, y = examples_to_arrays(examples)
        start = time.time()

        logger.info("regressor_training_started", kind=self.kind, samples=len(y))

        model = self._build_model()
        self._fit(model, X, y)

        # Swap only after a successful fit so concurrent predictions never see a half-trained model
        self._model = model
        self.sample_count = len(y)
        self.training_duration_ms = int((time.time() - start) * 1000)
        self.training_rmse = float(math.sqrt(mean_squared_error(y, model.predict(X))))

        logger.info(
            "regressor_training_completed",
            kind=self.kind,
            samples=self.sample_count,
            training_rmse=round(self.training_rmse, 2),
            duration_ms=self.training_duration_ms,
        )

    def predict(self, features: Sequence[float]) -> float:
        """Predicted total cost for one feature vector.

        Raises:
            InsufficientDataError: If the regressor has not been trained.
            ValidationError: If the feature vector is malformed.
        """
        if self._model is None:
            raise InsufficientDataError("Regressor has not been trained", sample_count=0)

        row = feature_row(features)
        return float(self._model.predict(row)[0])


class MLPCostRegressor(CostRegressor):
    """Feed-forward network: 4 -> 64 -> 32 -> 1."""

    kind = "mlp"

    def __init__(
        self,
        hidden_layers: Tuple[int, ...] = DEFAULT_HIDDEN_LAYERS,
        epochs: int = DEFAULT_EPOCHS,
        batch_size: int = DEFAULT_BATCH_SIZE,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        random_state: Optional[int] = None,
    ):
        super().__init__()
        self.hidden_layers = tuple(hidden_layers)
        self.epochs = epochs
        self.batch_size = batch_size
        self.learning_rate = learning_rate
        self.random_state = random_state

    def _build_model(self):
        network = MLPRegressor(
            hidden_layer_sizes=self.hidden_layers,
            activation="relu",
            solver="adam",
            learning_rate_init=self.learning_rate,
            batch_size=self.batch_size,
            max_iter=self.epochs,
            shuffle=True,
            random_state=self.random_state,
        )
        return TransformedTargetRegressor(
            regressor=make_pipeline(StandardScaler(), network),
            transformer=StandardScaler(),
        )

    def _fit(self, model, X: np.ndarray, y: np.ndarray) -> None:
        # Stopping at the epoch cap is expected, not a failure
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", category=ConvergenceWarning)
            # Small training sets are smaller than one batch; sklearn clips and warns
            warnings.filterwarnings("ignore", message=".*batch_size.*", category=UserWarning)
            model.fit(X, y)

        network = model.regressor_[-1]
        for epoch in range(0, len(network.loss_curve_), LOSS_LOG_INTERVAL):
            logger.debug("regressor_epoch", epoch=epoch, loss=round(network.loss_curve_[epoch], 6))


class LinearCostRegressor(CostRegressor):
    """Ordinary least squares on the raw features."""

    kind = "linear"

    def _build_model(self):
        return LinearRegression()


def create_regressor(
    kind: str = "mlp",
    epochs: int = DEFAULT_EPOCHS,
    batch_size: int = DEFAULT_BATCH_SIZE,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    random_state: Optional[int] = None,
) -> CostRegressor:
    """Build a regressor strategy by name.

    Raises:
        ValueError: If the kind is unknown.
    """
    if kind == MLPCostRegressor.kind:
        return MLPCostRegressor(
            epochs=epochs,
            batch_size=batch_size,
            learning_rate=learning_rate,
            random_state=random_state,
        )
    if kind == LinearCostRegressor.kind:
        return LinearCostRegressor()
    raise ValueError(f"Unknown regressor kind: {kind!r}")
