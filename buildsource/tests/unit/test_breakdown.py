"""
Unit Tests for the Rule-Based Breakdown Engine.

Tests compute_breakdown() and its helpers:
- Base cost formula and worked example
- Distribution shares sum to the base cost
- Floors and quality tier monotonicity
- Material consumption per category
- Unknown quality tier fallback
"""

import pytest

from models.estimate import QualityTier
from models.material import MaterialRecord
from services.breakdown import (
    BASE_RATES,
    COST_DISTRIBUTION,
    QUALITY_MULTIPLIERS,
    calculate_base_cost,
    calculate_materials_cost,
    compute_breakdown,
    material_quantity,
)


def _material(material_id: int, category: str, price: float) -> MaterialRecord:
    return MaterialRecord(id=material_id, name=f"M{material_id}", category=category, unit="unit", price=price)


# =============================================================================
# Test: Base cost
# =============================================================================


def test_standard_single_floor_example():
    """1000 sq ft, 1 floor, standard -> 1,200,000 base; labor 300k, structure 420k."""
    breakdown = compute_breakdown(1000, 1, QualityTier.STANDARD, [])

    assert calculate_base_cost(1000, 1, QualityTier.STANDARD) == pytest.approx(1_200_000)
    assert breakdown.labor == pytest.approx(300_000)
    assert breakdown.structure == pytest.approx(420_000)
    assert breakdown.foundation == pytest.approx(180_000)
    assert breakdown.materials == 0


def test_rate_and_multiplier_both_applied():
    """Luxury compounds its rate and multiplier: 2500 x 2.0 per sq ft."""
    assert calculate_base_cost(100, 1, QualityTier.LUXURY) == pytest.approx(100 * 2500 * 2.0)
    assert calculate_base_cost(100, 1, QualityTier.BASIC) == pytest.approx(100 * 800 * 0.8)


def test_floor_multiplier_applied():
    """Each floor above the first adds 30% to the base cost."""
    assert calculate_base_cost(1000, 3, "standard") == pytest.approx(1_200_000 * 1.6)


def test_tier_names_accepted():
    """String tier names behave like the enum."""
    assert calculate_base_cost(500, 2, "premium") == calculate_base_cost(500, 2, QualityTier.PREMIUM)


def test_unknown_tier_falls_back_to_standard():
    """Unknown tiers use the standard rate and multiplier."""
    assert calculate_base_cost(1000, 1, "palatial") == pytest.approx(1_200_000)


# =============================================================================
# Test: Distribution invariant
# =============================================================================


def test_distribution_weights_sum_to_one():
    """Labor + foundation + structure + finishing + electrical + plumbing + contingencies = 1.0."""
    assert sum(COST_DISTRIBUTION.values()) == pytest.approx(1.0)


@pytest.mark.parametrize("tier", list(QualityTier))
@pytest.mark.parametrize("area,floors", [(100, 1), (1750, 2), (10000, 4)])
def test_non_material_buckets_sum_to_base_cost(tier, area, floors):
    """All buckets except materials add up to exactly the base cost."""
    breakdown = compute_breakdown(area, floors, tier, [])
    non_material = breakdown.total() - breakdown.materials

    assert non_material == pytest.approx(calculate_base_cost(area, floors, tier))


def test_materials_bucket_is_additive():
    """Selecting materials changes only the materials bucket."""
    without = compute_breakdown(1000, 1, "standard", [])
    with_materials = compute_breakdown(1000, 1, "standard", [_material(1, "Cement & Concrete", 400)])

    assert with_materials.labor == without.labor
    assert with_materials.structure == without.structure
    assert with_materials.total() == pytest.approx(without.total() + with_materials.materials)


# =============================================================================
# Test: Monotonicity
# =============================================================================


def test_floors_strictly_increase_base_cost():
    """Adding a floor always increases the base cost."""
    costs = [calculate_base_cost(1200, floors, "standard") for floors in range(1, 8)]

    assert all(a < b for a, b in zip(costs, costs[1:]))


def test_quality_tiers_ordered():
    """basic < standard < premium < luxury for the same area and floors."""
    tiers = [QualityTier.BASIC, QualityTier.STANDARD, QualityTier.PREMIUM, QualityTier.LUXURY]
    totals = [compute_breakdown(1500, 2, tier, []).total() for tier in tiers]

    assert totals == sorted(totals)
    assert len(set(totals)) == 4


def test_rate_tables_cover_every_tier():
    """Both quality tables define all four tiers."""
    assert set(BASE_RATES) == set(QualityTier)
    assert set(QUALITY_MULTIPLIERS) == set(QualityTier)


# =============================================================================
# Test: Material quantities
# =============================================================================


@pytest.mark.parametrize("category,factor", [
    ("Tiles & Flooring", 1.2),
    ("Paints & Finishes", 0.5),
    ("Bricks & Blocks", 10),
    ("Cement & Concrete", 0.8),
    ("Steel & Reinforcement", 0.1),
    ("", 0.1),
])
def test_material_quantity_by_category(category, factor):
    """Consumption per sq ft depends on the category; unknown categories use 0.1."""
    assert material_quantity(category, 1000) == pytest.approx(1000 * factor)


def test_materials_cost_sums_price_times_quantity():
    """Materials cost = sum(unit price x quantity)."""
    materials = [
        _material(1, "Tiles & Flooring", 50),
        _material(2, "Bricks & Blocks", 10),
        _material(3, "Plumbing", 140),
    ]
    expected = 50 * 1200 + 10 * 10_000 + 140 * 100

    assert calculate_materials_cost(materials, 1000) == pytest.approx(expected)


def test_duplicate_materials_counted_per_occurrence():
    """The same material selected twice is costed twice."""
    cement = _material(1, "Cement & Concrete", 400)

    once = calculate_materials_cost([cement], 500)
    twice = calculate_materials_cost([cement, cement], 500)

    assert twice == pytest.approx(2 * once)
