"""
Pydantic models for model-openapi.
"""
from .common import BasePydanticModel
from .conversion import ValidationIssue, ValidationResult, ValidationSeverity
from .document import DocumentDefinition, ModelDocument, PropertyDocument
from .metadata import FieldMetadata

__all__ = [
    "BasePydanticModel",
    "DocumentDefinition",
    "FieldMetadata",
    "ModelDocument",
    "PropertyDocument",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
]
