"""Estimator context for BuildSource.

Session-scoped holder for the material catalog, the historical
projects and the regressor trained on them. Training happens lazily
on the first prediction and runs at most once, even when several
request threads arrive together.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np
import structlog
from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings, settings as default_settings
from models.project import HistoricalProject, TrainingExample
from services.data_store import JsonDataStore
from services.material_catalog import MaterialCatalog
from services.regression import CostRegressor, create_regressor
from services.training_data import SYNTHETIC_SAMPLE_COUNT, build_training_set
from utils.estimate_logger import log_training_complete, log_training_start

logger = structlog.get_logger(__name__)


def _load_historical_projects(records: Iterable[Any]) -> List[HistoricalProject]:
    """Validate raw historical records, skipping malformed ones with a warning."""
    projects = []
    for index, raw in enumerate(records):
        if isinstance(raw, HistoricalProject):
            projects.append(raw)
            continue
        try:
            projects.append(HistoricalProject.model_validate(raw))
        except PydanticValidationError as e:
            logger.warning(
                "historical_project_skipped",
                index=index,
                errors=[f"{err['loc']}: {err['msg']}" for err in e.errors()]
            )
    return projects


class EstimatorContext:
    """Catalog + historical data + lazily trained regressor."""

    def __init__(
        self,
        catalog: MaterialCatalog,
        historical_projects: Iterable[Any] = (),
        regressor: Optional[CostRegressor] = None,
        synthetic_count: int = SYNTHETIC_SAMPLE_COUNT,
        seed: Optional[int] = None,
    ):
        """Initialize EstimatorContext.

        Args:
            catalog: Read-only material catalog
            historical_projects: Raw dicts or HistoricalProject records; malformed
                records are skipped
            regressor: Regression strategy; defaults to the MLP
            synthetic_count: Synthetic examples added per training run
            seed: Seed for synthetic sampling; None draws fresh samples each run
        """
        self.catalog = catalog
        self.historical_projects = _load_historical_projects(historical_projects)
        self.regressor = regressor if regressor is not None else create_regressor("mlp")
        self.synthetic_count = synthetic_count
        self._rng = np.random.default_rng(seed)
        self._lock = threading.Lock()
        self.training_runs = 0

    @classmethod
    def from_data_store(
        cls,
        store: JsonDataStore,
        settings: Optional[Settings] = None,
    ) -> "EstimatorContext":
        """Build a context from the JSON data layer and settings."""
        settings = settings or default_settings
        settings.validate()

        catalog = MaterialCatalog(store.get_materials())
        projects = store.get_historical_projects()
        regressor = create_regressor(
            settings.regressor_kind,
            epochs=settings.training_epochs,
            batch_size=settings.training_batch_size,
            learning_rate=settings.training_learning_rate,
            random_state=settings.random_seed,
        )

        logger.info(
            "estimator_context_created",
            materials=len(catalog),
            historical_projects=len(projects),
            regressor=regressor.kind,
        )
        return cls(
            catalog=catalog,
            historical_projects=projects,
            regressor=regressor,
            synthetic_count=settings.synthetic_sample_count,
            seed=settings.random_seed,
        )

    @property
    def is_trained(self) -> bool:
        return self.regressor.is_trained

    def build_training_set(self) -> List[TrainingExample]:
        return build_training_set(
            self.historical_projects,
            rng=self._rng,
            synthetic_count=self.synthetic_count,
        )

    def _train_locked(self) -> None:
        examples = self.build_training_set()
        log_training_start(self.regressor.kind, len(examples))
        self.regressor.train(examples)
        self.training_runs += 1
        log_training_complete(
            self.regressor.kind,
            self.regressor.sample_count,
            self.regressor.training_duration_ms or 0,
            self.regressor.training_rmse,
        )

    def ensure_trained(self) -> None:
        """Train once; later calls return immediately."""
        if self.regressor.is_trained:
            return
        with self._lock:
            if self.regressor.is_trained:
                return
            self._train_locked()

    def retrain(self) -> None:
        """Refit from a freshly sampled training set."""
        with self._lock:
            self._train_locked()

    def predict(self, features: Sequence[float]) -> float:
        """Regression estimate, training first if needed."""
        self.ensure_trained()
        return self.regressor.predict(features)

    def summary(self) -> Dict[str, Any]:
        return {
            "materials": len(self.catalog),
            "historicalProjects": len(self.historical_projects),
            "regressor": self.regressor.kind,
            "trained": self.is_trained,
            "trainingRuns": self.training_runs,
        }
