"""BuildSource error handling.

Custom exceptions and error codes for the cost estimation engine.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Validation Errors (1xxx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FIELD = "INVALID_FIELD"

    # Model Errors (2xxx)
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    ESTIMATE_FAILED = "ESTIMATE_FAILED"

    # Data Store Errors (3xxx)
    DATA_STORE_ERROR = "DATA_STORE_ERROR"
    MATERIAL_NOT_FOUND = "MATERIAL_NOT_FOUND"


class BuildSourceError(Exception):
    """Base exception for BuildSource errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize BuildSourceError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(BuildSourceError):
    """Malformed or out-of-range project input."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class InsufficientDataError(BuildSourceError):
    """Training data is empty or malformed, or the regressor was never trained."""

    def __init__(self, message: str, sample_count: int = 0, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.INSUFFICIENT_DATA,
            message=message,
            details={**(details or {}), "sample_count": sample_count}
        )
        self.sample_count = sample_count


class MaterialNotFoundError(BuildSourceError):
    """Single material lookup failed."""

    def __init__(self, material_id: Any):
        super().__init__(
            code=ErrorCode.MATERIAL_NOT_FOUND,
            message="Not found",
            details={"material_id": material_id}
        )
        self.material_id = material_id


class DataStoreError(BuildSourceError):
    """A data file exists but does not have the expected structure."""

    def __init__(self, message: str, filename: str, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.DATA_STORE_ERROR,
            message=message,
            details={**(details or {}), "filename": filename}
        )
        self.filename = filename
