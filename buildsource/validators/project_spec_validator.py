"""ProjectSpec parsing and validation.

Deserializes the estimate form payload into a typed ProjectSpec and
turns Pydantic errors into a single human-readable message suitable
for showing to the user.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError
import structlog

from config.errors import ValidationError
from models.estimate import MAX_AREA_SQFT, MIN_AREA_SQFT, ProjectSpec

logger = structlog.get_logger(__name__)

# User-facing messages keyed by the model field that failed
FIELD_MESSAGES = {
    "project_type": "Please choose a valid project type",
    "area": f"Please enter area between {MIN_AREA_SQFT}-{MAX_AREA_SQFT} sq ft",
    "floors": "Number of floors must be a positive whole number",
    "quality_tier": "Quality must be one of basic, standard, premium or luxury",
    "selected_materials": "Please select at least one material",
}
MISSING_FIELDS_MESSAGE = "Please fill all required fields"


@dataclass
class ValidationResult:
    """Result of ProjectSpec validation."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    parsed: Optional[ProjectSpec] = None
    field: Optional[str] = None


def _field_name(loc: tuple) -> Optional[str]:
    """Map an error location (which may be an alias) to the model field name."""
    if not loc:
        return None
    head = loc[0]
    for name, info in ProjectSpec.model_fields.items():
        choices = getattr(info.validation_alias, "choices", None) or []
        if head == name or head in choices:
            return name
    return str(head)


def validate_project_spec(data: Any) -> ValidationResult:
    """Validate a raw payload and return a result instead of raising."""
    if isinstance(data, ProjectSpec):
        return ValidationResult(is_valid=True, parsed=data)

    if not isinstance(data, dict):
        return ValidationResult(
            is_valid=False,
            errors=["Project details must be a JSON object"],
        )

    try:
        parsed = ProjectSpec.model_validate(data)
    except PydanticValidationError as e:
        errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        first = e.errors()[0]
        failed_field = _field_name(first["loc"])
        logger.info("project_spec_rejected", field=failed_field, errors=errors)
        return ValidationResult(is_valid=False, errors=errors, field=failed_field)

    return ValidationResult(is_valid=True, parsed=parsed)


def parse_project_spec(data: Any) -> ProjectSpec:
    """Parse a raw payload into a ProjectSpec.

    Raises:
        ValidationError: With a user-facing message naming the first bad field.
    """
    result = validate_project_spec(data)
    if result.is_valid:
        return result.parsed

    if result.field is None:
        message = result.errors[0] if result.errors else MISSING_FIELDS_MESSAGE
    else:
        missing = any(err.endswith("Field required") for err in result.errors)
        message = MISSING_FIELDS_MESSAGE if missing else FIELD_MESSAGES.get(result.field, result.errors[0])

    raise ValidationError(message, field=result.field, details={"errors": result.errors})

