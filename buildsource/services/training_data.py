"""
Historical Project Sampler for BuildSource.

Turns loosely structured historical project records into numeric
training examples and pads them with synthetic examples drawn from
the rule-of-thumb cost formula.

Historical records carry no floor, quality or material detail, so
those features get fixed placeholder values. They mainly anchor the
regressor near realistic totals.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np
import structlog

from models.project import HistoricalProject, TrainingExample

logger = structlog.get_logger(__name__)

# Fallbacks when the free text carries no usable figure
DEFAULT_AREA_SQFT = 1000
DEFAULT_BUDGET = 500_000

# Placeholder features for historical rows
HISTORICAL_FLOORS = 2
HISTORICAL_QUALITY_INDEX = 2
HISTORICAL_MATERIAL_COUNT = 5

RUPEES_PER_LAKH = 100_000
SYNTHETIC_SAMPLE_COUNT = 100

# Synthetic feature ranges (integer bounds are inclusive)
SYNTHETIC_AREA_MIN = 500.0
SYNTHETIC_AREA_SPAN = 5000.0
SYNTHETIC_FLOORS = (1, 4)
SYNTHETIC_QUALITY = (0, 3)
SYNTHETIC_MATERIAL_COUNT = (5, 14)

SYNTHETIC_BASE_RATE = 1200

_AREA_PATTERN = re.compile(r"(\d+)")
_BUDGET_PATTERN = re.compile(r"₹(\d+)L")

ProjectInput = Union[HistoricalProject, Dict[str, Any]]


def _as_project(project: ProjectInput) -> HistoricalProject:
    if isinstance(project, HistoricalProject):
        return project
    return HistoricalProject.model_validate(project)


def parse_area(summary: Optional[str]) -> int:
    """First integer in the summary text, or DEFAULT_AREA_SQFT."""
    match = _AREA_PATTERN.search(summary or "")
    return int(match.group(1)) if match else DEFAULT_AREA_SQFT


def parse_budget(budget: Optional[str]) -> int:
    """Rupee amount from a '₹NL' budget string, or DEFAULT_BUDGET."""
    match = _BUDGET_PATTERN.search(budget or "")
    return int(match.group(1)) * RUPEES_PER_LAKH if match else DEFAULT_BUDGET


def parse_historical_project(project: ProjectInput) -> TrainingExample:
    """Convert one historical record into a training example."""
    record = _as_project(project)
    area = parse_area(record.summary)
    return TrainingExample(
        features=(
            float(area),
            float(HISTORICAL_FLOORS),
            float(HISTORICAL_QUALITY_INDEX),
            float(HISTORICAL_MATERIAL_COUNT),
        ),
        target=float(parse_budget(record.budget)),
    )


def synthetic_target(area: float, floors: float, quality_index: float, material_count: float) -> float:
    """Rule-of-thumb total used to label synthetic examples."""
    cost = area * SYNTHETIC_BASE_RATE
    cost *= 1 + floors * 0.3
    cost *= 1 + quality_index * 0.2
    cost *= 1 + material_count * 0.05
    return cost


def generate_synthetic_examples(
    count: int = SYNTHETIC_SAMPLE_COUNT,
    rng: Optional[np.random.Generator] = None,
) -> List[TrainingExample]:
    """Draw synthetic examples uniformly over the feature ranges.

    Args:
        count: Number of examples to generate
        rng: NumPy generator; a fresh unseeded one is used when omitted

    Returns:
        List of exactly ``count`` examples
    """
    rng = rng if rng is not None else np.random.default_rng()

    areas = rng.random(count) * SYNTHETIC_AREA_SPAN + SYNTHETIC_AREA_MIN
    floors = rng.integers(SYNTHETIC_FLOORS[0], SYNTHETIC_FLOORS[1] + 1, size=count)
    qualities = rng.integers(SYNTHETIC_QUALITY[0], SYNTHETIC_QUALITY[1] + 1, size=count)
    material_counts = rng.integers(
        SYNTHETIC_MATERIAL_COUNT[0], SYNTHETIC_MATERIAL_COUNT[1] + 1, size=count
    )

    examples = []
    for area, floor_count, quality, material_count in zip(areas, floors, qualities, material_counts):
        features = (float(area), float(floor_count), float(quality), float(material_count))
        examples.append(TrainingExample(features=features, target=synthetic_target(*features)))
    return examples


def build_training_set(
    historical_projects: Iterable[ProjectInput],
    rng: Optional[np.random.Generator] = None,
    synthetic_count: int = SYNTHETIC_SAMPLE_COUNT,
) -> List[TrainingExample]:
    """One example per historical project plus ``synthetic_count`` synthetic ones.

    Ordering carries no meaning; the result is consumed as a single batch.
    """
    historical = [parse_historical_project(project) for project in historical_projects]
    synthetic = generate_synthetic_examples(synthetic_count, rng=rng)

    logger.info(
        "training_set_built",
        historical_examples=len(historical),
        synthetic_examples=len(synthetic),
    )
    return historical + synthetic
