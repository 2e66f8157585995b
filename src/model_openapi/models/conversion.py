"""Models describing what a conversion found worth reporting."""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .common import BasePydanticModel


class ValidationSeverity(str, Enum):
    """Conversion issue severity levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BasePydanticModel):
    """Represents one issue found while converting a model schema."""
    severity: ValidationSeverity
    message: str
    path: Optional[str] = None # JSON-pointer-like location in the generated schema
    details: Optional[Dict[str, Any]] = None


class ValidationResult(BasePydanticModel):
    """Collected issues of one conversion."""
    is_valid: bool
    issues: List[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == ValidationSeverity.ERROR for issue in self.issues)
