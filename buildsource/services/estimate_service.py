"""
Estimate Orchestrator for BuildSource.

Combines the regressor's scalar prediction with the rule-based
breakdown into the headline estimate shown to the customer:

    total = max(regression, sum(breakdown))
    range = total x [0.9, 1.1]

plus fixed-rule advisory text. Input is validated before any model or
breakdown work starts, and any failure aborts the whole estimate.
"""

from typing import Any, Dict, List, Union

import structlog

from config.errors import BuildSourceError
from models.estimate import EstimateResult, ProjectSpec, QualityTier
from services.breakdown import compute_breakdown
from services.estimator_context import EstimatorContext
from utils.estimate_logger import log_estimate_failed, log_estimate_result
from validators.project_spec_validator import parse_project_spec

logger = structlog.get_logger(__name__)

# Recommendation thresholds
LARGE_AREA_SQFT = 3000
MULTI_STOREY_FLOORS = 2
HIGH_VALUE_TOTAL = 5_000_000

RECOMMENDATION_PHASED = "Consider phased construction for large areas to manage cash flow"
RECOMMENDATION_STRUCTURAL = "Multi-story construction requires additional structural engineering"
RECOMMENDATION_LUXURY = "Luxury finishes may require specialized contractors"
RECOMMENDATION_FINANCING = "Consider government subsidies or housing loans for high-value projects"
RECOMMENDATION_QUOTES = "Get multiple contractor quotes before finalizing"
RECOMMENDATION_CONTINGENCY = "Include 5-10% contingency for unexpected costs"


def generate_recommendations(
    area: float,
    floors: int,
    quality_tier: Union[QualityTier, str],
    total_cost: float,
) -> List[str]:
    """Advisory text in fixed order; the last two tips are always present."""
    tier = quality_tier.value if isinstance(quality_tier, QualityTier) else quality_tier
    recommendations = []

    if area > LARGE_AREA_SQFT:
        recommendations.append(RECOMMENDATION_PHASED)
    if floors > MULTI_STOREY_FLOORS:
        recommendations.append(RECOMMENDATION_STRUCTURAL)
    if tier == QualityTier.LUXURY.value:
        recommendations.append(RECOMMENDATION_LUXURY)
    if total_cost > HIGH_VALUE_TOTAL:
        recommendations.append(RECOMMENDATION_FINANCING)

    recommendations.append(RECOMMENDATION_QUOTES)
    recommendations.append(RECOMMENDATION_CONTINGENCY)
    return recommendations


class EstimateService:
    """Produces EstimateResults against one EstimatorContext."""

    def __init__(self, context: EstimatorContext):
        self.context = context

    def estimate(self, spec: Union[ProjectSpec, Dict[str, Any]]) -> EstimateResult:
        """Estimate the cost of one project.

        Args:
            spec: ProjectSpec or raw form payload

        Returns:
            EstimateResult with headline total, range, breakdown and advice

        Raises:
            ValidationError: If the spec is malformed; raised before the
                regressor is touched.
            InsufficientDataError: If the regressor cannot be trained.
        """
        project = parse_project_spec(spec)

        logger.info(
            "estimate_requested",
            project_type=project.project_type.value,
            area=project.area,
            floors=project.floors,
            quality_tier=project.quality_tier.value,
            selected_materials=len(project.selected_materials),
        )

        try:
            regression_estimate = self.context.predict(project.feature_vector())

            materials = self.context.catalog.resolve(project.selected_materials)
            breakdown = compute_breakdown(
                project.area,
                project.floors,
                project.quality_tier,
                materials,
            )
        except BuildSourceError as e:
            log_estimate_failed(e.code, e.message)
            raise

        rule_based_total = breakdown.total()
        total_cost = max(regression_estimate, rule_based_total)

        recommendations = generate_recommendations(
            project.area,
            project.floors,
            project.quality_tier,
            total_cost,
        )

        result = EstimateResult.from_total(
            total_cost=total_cost,
            breakdown=breakdown,
            recommendations=recommendations,
            regression_estimate=regression_estimate,
        )

        log_estimate_result(
            total_cost=result.total_cost,
            regression_estimate=regression_estimate,
            rule_based_total=rule_based_total,
            breakdown=breakdown.as_dict(),
            recommendation_count=len(recommendations),
        )
        return result
