"""Historical project and training example models for BuildSource."""

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class HistoricalProject(BaseModel):
    """A completed project from projects.json.

    Summary and budget are free text: the summary embeds an area figure
    and the budget a rupee amount in lakhs (e.g. "₹45L").
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    title: Optional[str] = Field(default=None, description="Project title")
    summary: Optional[str] = Field(default=None, description="Free-text summary with an area figure")
    budget: Optional[str] = Field(default=None, description="Free-text budget, e.g. '₹45L'")


Features = Tuple[float, float, float, float]


@dataclass(frozen=True)
class TrainingExample:
    """
    One regression training row.

    Attributes:
        features: (area, floors, quality_index, material_count)
        target: Total cost in rupees
    """

    features: Features
    target: float
