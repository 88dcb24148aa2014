"""
Rule-Based Breakdown Engine for BuildSource.

Allocates a construction cost into eight category buckets using fixed
rate tables. The materials bucket comes from the selected catalog
materials; every other bucket is a fixed share of the base cost.

Note: the base cost applies both a per-tier rate and a per-tier
multiplier. Both tables encode the same four tiers, so quality is
counted twice.
"""

from typing import Dict, Iterable, Union

import structlog

from models.estimate import CostBreakdown, QualityTier
from models.material import MaterialCategory, MaterialRecord

logger = structlog.get_logger(__name__)

# Rupees per sq ft
BASE_RATES: Dict[QualityTier, float] = {
    QualityTier.BASIC: 800,
    QualityTier.STANDARD: 1200,
    QualityTier.PREMIUM: 1800,
    QualityTier.LUXURY: 2500,
}

QUALITY_MULTIPLIERS: Dict[QualityTier, float] = {
    QualityTier.BASIC: 0.8,
    QualityTier.STANDARD: 1.0,
    QualityTier.PREMIUM: 1.4,
    QualityTier.LUXURY: 2.0,
}

# Each floor above the first adds 30% to the base cost
FLOOR_INCREMENT = 0.3

# Shares of the base cost; must sum to 1.0
COST_DISTRIBUTION: Dict[str, float] = {
    "labor": 0.25,
    "foundation": 0.15,
    "structure": 0.35,
    "finishing": 0.15,
    "electrical": 0.05,
    "plumbing": 0.03,
    "contingencies": 0.02,
}

# Units consumed per sq ft of built-up area
MATERIAL_CONSUMPTION: Dict[str, float] = {
    MaterialCategory.TILES_AND_FLOORING: 1.2,
    MaterialCategory.PAINTS_AND_FINISHES: 0.5,
    MaterialCategory.BRICKS_AND_BLOCKS: 10,
    MaterialCategory.CEMENT_AND_CONCRETE: 0.8,
}
DEFAULT_CONSUMPTION = 0.1


def resolve_quality_tier(quality_tier: Union[QualityTier, str]) -> QualityTier:
    """Coerce a tier name, falling back to STANDARD for unknown values."""
    if isinstance(quality_tier, QualityTier):
        return quality_tier
    try:
        return QualityTier(quality_tier)
    except ValueError:
        logger.warning("unknown_quality_tier", quality_tier=quality_tier, fallback=QualityTier.STANDARD.value)
        return QualityTier.STANDARD


def material_quantity(category: str, area: float) -> float:
    """Estimated units of a material category needed for the area."""
    return area * MATERIAL_CONSUMPTION.get(category, DEFAULT_CONSUMPTION)


def calculate_materials_cost(selected_materials: Iterable[MaterialRecord], area: float) -> float:
    """Sum of unit price x estimated quantity over the selected materials."""
    return sum(
        material.unit_price * material_quantity(material.category, area)
        for material in selected_materials
    )


def floor_multiplier(floors: int) -> float:
    return 1 + (floors - 1) * FLOOR_INCREMENT


def calculate_base_cost(area: float, floors: int, quality_tier: Union[QualityTier, str]) -> float:
    """Area x tier rate x tier multiplier x floor multiplier."""
    tier = resolve_quality_tier(quality_tier)
    return area * BASE_RATES[tier] * QUALITY_MULTIPLIERS[tier] * floor_multiplier(floors)


def compute_breakdown(
    area: float,
    floors: int,
    quality_tier: Union[QualityTier, str],
    selected_materials: Iterable[MaterialRecord],
) -> CostBreakdown:
    """Allocate cost into the eight categories.

    Args:
        area: Built-up area in sq ft
        floors: Number of floors
        quality_tier: Tier enum or name; unknown names use STANDARD
        selected_materials: Resolved catalog records

    Returns:
        CostBreakdown whose non-material buckets sum to the base cost
    """
    base_cost = calculate_base_cost(area, floors, quality_tier)
    shares = {name: base_cost * weight for name, weight in COST_DISTRIBUTION.items()}

    return CostBreakdown(
        materials=calculate_materials_cost(selected_materials, area),
        **shares,
    )
