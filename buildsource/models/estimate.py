"""Estimate request and result models for BuildSource.

Pydantic models for the project details submitted to the estimator
and the estimate returned to the web layer.
"""

from enum import Enum
from typing import Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class QualityTier(str, Enum):
    """Construction quality tier."""

    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


# Ordinal used as the regression quality feature
QUALITY_INDEX: Dict[QualityTier, int] = {
    QualityTier.BASIC: 0,
    QualityTier.STANDARD: 1,
    QualityTier.PREMIUM: 2,
    QualityTier.LUXURY: 3,
}


class ProjectType(str, Enum):
    """Kind of building project."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    RENOVATION = "renovation"


MIN_AREA_SQFT = 100
MAX_AREA_SQFT = 10000


class ProjectSpec(BaseModel):
    """User-submitted project details for a single estimate."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_type: ProjectType = Field(
        validation_alias=AliasChoices("project_type", "projectType"),
        description="Type of project"
    )
    area: float = Field(
        ge=MIN_AREA_SQFT,
        le=MAX_AREA_SQFT,
        description="Built-up area in sq ft"
    )
    floors: int = Field(gt=0, description="Number of floors")
    quality_tier: QualityTier = Field(
        validation_alias=AliasChoices("quality_tier", "qualityTier", "quality"),
        description="Quality tier"
    )
    selected_materials: List[int] = Field(
        min_length=1,
        validation_alias=AliasChoices("selected_materials", "selectedMaterials"),
        description="Catalog IDs of the selected materials"
    )

    @field_validator("floors", mode="before")
    @classmethod
    def reject_boolean_floors(cls, value):
        if isinstance(value, bool):
            raise ValueError("floors must be a whole number")
        return value

    @field_validator("selected_materials", mode="before")
    @classmethod
    def reject_boolean_material_ids(cls, value):
        if isinstance(value, (list, tuple)) and any(isinstance(item, bool) for item in value):
            raise ValueError("material ids must be integers")
        return value

    @property
    def quality_index(self) -> int:
        return QUALITY_INDEX[self.quality_tier]

    def feature_vector(self) -> List[float]:
        """[area, floors, quality_index, material_count] for the regressor."""
        return [
            float(self.area),
            float(self.floors),
            float(self.quality_index),
            float(len(self.selected_materials)),
        ]


BREAKDOWN_CATEGORIES = (
    "materials",
    "labor",
    "foundation",
    "structure",
    "finishing",
    "electrical",
    "plumbing",
    "contingencies",
)


class CostBreakdown(BaseModel):
    """Rule-based cost allocation across the eight fixed categories."""

    materials: float = Field(default=0.0, ge=0)
    labor: float = Field(default=0.0, ge=0)
    foundation: float = Field(default=0.0, ge=0)
    structure: float = Field(default=0.0, ge=0)
    finishing: float = Field(default=0.0, ge=0)
    electrical: float = Field(default=0.0, ge=0)
    plumbing: float = Field(default=0.0, ge=0)
    contingencies: float = Field(default=0.0, ge=0)

    def total(self) -> float:
        """Sum of all category amounts."""
        return sum(getattr(self, name) for name in BREAKDOWN_CATEGORIES)

    def as_dict(self) -> Dict[str, float]:
        """Category amounts in fixed display order."""
        return {name: getattr(self, name) for name in BREAKDOWN_CATEGORIES}


RANGE_LOW_FACTOR = 0.9
RANGE_HIGH_FACTOR = 1.1


class EstimateResult(BaseModel):
    """Final estimate returned for one project spec.

    Never persisted; built fresh for each request.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_cost: float = Field(alias="totalCost", gt=0, description="Headline estimate")
    range_low: float = Field(alias="rangeLow", description="Total x 0.9")
    range_high: float = Field(alias="rangeHigh", description="Total x 1.1")
    breakdown: CostBreakdown = Field(description="Rule-based category breakdown")
    recommendations: List[str] = Field(
        default_factory=list,
        description="Advisory text in display order"
    )
    regression_estimate: float = Field(
        alias="regressionEstimate",
        description="Scalar produced by the regressor"
    )
    rule_based_total: float = Field(
        alias="ruleBasedTotal",
        description="Sum of the breakdown categories"
    )

    @classmethod
    def from_total(
        cls,
        total_cost: float,
        breakdown: CostBreakdown,
        recommendations: List[str],
        regression_estimate: float,
    ) -> "EstimateResult":
        """Build a result with the ±10% range derived from the total."""
        return cls(
            total_cost=total_cost,
            range_low=total_cost * RANGE_LOW_FACTOR,
            range_high=total_cost * RANGE_HIGH_FACTOR,
            breakdown=breakdown,
            recommendations=list(recommendations),
            regression_estimate=regression_estimate,
            rule_based_total=breakdown.total(),
        )

    def to_api_dict(self) -> Dict:
        """camelCase dict for JSON responses."""
        return self.model_dump(by_alias=True)
