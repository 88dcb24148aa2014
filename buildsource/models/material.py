"""Material catalog models for BuildSource.

Pydantic models for the material records served from materials.json.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MaterialCategory:
    """Category names with dedicated consumption rules.

    Any other category string is valid and treated as generic.
    """

    TILES_AND_FLOORING = "Tiles & Flooring"
    PAINTS_AND_FINISHES = "Paints & Finishes"
    BRICKS_AND_BLOCKS = "Bricks & Blocks"
    CEMENT_AND_CONCRETE = "Cement & Concrete"


class MaterialRecord(BaseModel):
    """A single catalog material.

    Immutable once loaded. The JSON key for the unit price is ``price``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(description="Unique material ID")
    name: str = Field(description="Display name")
    category: str = Field(description="Catalog category")
    unit: str = Field(description="Pricing unit, e.g. 'bag' or 'sq ft'")
    unit_price: float = Field(
        alias="price",
        gt=0,
        description="Price per unit in rupees"
    )
    image: Optional[str] = Field(
        default=None,
        description="Image file name under the static assets directory"
    )

    def to_api_dict(self) -> dict:
        """Convert to the shape served by /api/materials."""
        return self.model_dump(by_alias=True, exclude_none=True)
