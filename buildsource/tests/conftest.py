"""Pytest configuration and shared fixtures for BuildSource tests."""

import json
import os
import sys

import pytest


# ============================================================================
# Ensure local imports work (config/, models/, services/, utils/, validators/)
# ============================================================================
#
# The codebase uses absolute imports like `from services...`; this makes
# `buildsource/` importable as the top-level module root regardless of
# where pytest is invoked from.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
if TESTS_DIR not in sys.path:
    sys.path.insert(0, TESTS_DIR)

from sklearn.dummy import DummyRegressor  # noqa: E402

from config.settings import Settings  # noqa: E402
from services.estimator_context import EstimatorContext  # noqa: E402
from services.material_catalog import MaterialCatalog  # noqa: E402
from services.regression import CostRegressor, MLPCostRegressor  # noqa: E402
from fixtures.mock_catalog_data import MOCK_HISTORICAL_PROJECTS, MOCK_MATERIALS  # noqa: E402


# ============================================================================
# Regressor Doubles
# ============================================================================


class ConstantRegressor(CostRegressor):
    """Regressor that always predicts the same value and counts calls."""

    kind = "constant"

    def __init__(self, value: float = 1.0):
        super().__init__()
        self.value = value
        self.train_calls = 0
        self.predict_calls = 0

    def _build_model(self):
        return DummyRegressor(strategy="constant", constant=self.value)

    def train(self, examples):
        self.train_calls += 1
        super().train(examples)

    def predict(self, features):
        self.predict_calls += 1
        return super().predict(features)


# ============================================================================
# Catalog & Data
# ============================================================================


@pytest.fixture
def sample_materials():
    """Raw material records as stored in materials.json."""
    return [dict(m) for m in MOCK_MATERIALS]


@pytest.fixture
def sample_historical_projects():
    """Raw historical project records as stored in projects.json."""
    return [dict(p) for p in MOCK_HISTORICAL_PROJECTS]


@pytest.fixture
def catalog(sample_materials):
    """MaterialCatalog over the mock materials."""
    return MaterialCatalog(sample_materials)


@pytest.fixture
def data_dir(tmp_path, sample_materials, sample_historical_projects):
    """Temporary data directory with materials.json and projects.json."""
    (tmp_path / "materials.json").write_text(json.dumps(sample_materials), encoding="utf-8")
    (tmp_path / "projects.json").write_text(
        json.dumps(sample_historical_projects, ensure_ascii=False), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def test_settings(data_dir):
    """Settings pointing at the temporary data directory with a fixed seed."""
    return Settings(
        data_dir=str(data_dir),
        regressor_kind="mlp",
        training_epochs=100,
        training_batch_size=32,
        training_learning_rate=0.01,
        synthetic_sample_count=100,
        random_seed=7,
        port=3000,
        log_level="INFO",
    )


# ============================================================================
# Estimator Contexts
# ============================================================================


@pytest.fixture
def constant_regressor():
    """Regressor predicting 1.0 so the rule-based total always wins."""
    return ConstantRegressor(value=1.0)


@pytest.fixture
def stub_context(catalog, sample_historical_projects, constant_regressor):
    """Context with a constant regressor for deterministic estimates."""
    return EstimatorContext(
        catalog=catalog,
        historical_projects=sample_historical_projects,
        regressor=constant_regressor,
        seed=11,
    )


@pytest.fixture
def mlp_context(catalog, sample_historical_projects):
    """Context with the real MLP regressor and seeded sampling."""
    return EstimatorContext(
        catalog=catalog,
        historical_projects=sample_historical_projects,
        regressor=MLPCostRegressor(random_state=3),
        seed=5,
    )
