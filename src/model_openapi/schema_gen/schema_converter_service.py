"""
Service responsible for converting host data models to OpenAPI schema objects,
including logging and a report of what the conversion could not express.
"""
from typing import Any, Dict, List, Mapping, Optional

import structlog
from pydantic import BaseModel, Field

from ..config import Config
from ..models.conversion import ValidationIssue, ValidationResult, ValidationSeverity
from ..models.metadata import FieldMetadata
from .converter import extract_field_metadata, read_model_schema, schema_to_openapi

logger = structlog.get_logger(__name__)


class ConversionServiceResult(BaseModel):
    openapi_schema: Optional[Dict[str, Any]] = None
    validation_issues: List[ValidationIssue] = Field(default_factory=list)
    conversion_version: Optional[str] = None
    error_message: Optional[str] = None # For failures in the host model that prevent conversion

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == ValidationSeverity.ERROR for issue in self.validation_issues) or self.error_message is not None

    @property
    def validation_result(self) -> ValidationResult:
        return ValidationResult(is_valid=not self.has_errors, issues=self.validation_issues)


class SchemaConverterService:
    """
    Converts models and bare schema trees, and inspects the generated schema
    for lossy spots (non-object roots, fields that came out untyped, metadata
    for fields the schema does not declare).
    """

    def __init__(self, app_config: Config):
        self.app_config = app_config
        self.logger = logger.bind(service="SchemaConverterService")

    def _model_label(self, model: Any) -> str:
        name = getattr(model, "name", None)
        if isinstance(name, str) and name:
            return name
        return type(model).__name__

    def convert_model(self, model: Any, model_name: Optional[str] = None) -> ConversionServiceResult:
        """Converts a host model; failures raised by the host model end up in `error_message`."""
        log = self.logger.bind(model_name=model_name or self._model_label(model))
        log.debug("Starting conversion of model to OpenAPI schema.")

        try:
            schema = read_model_schema(model)
            field_metadata = extract_field_metadata(model)
        except Exception as e:
            log.exception("Error while reading the model definition.", error=str(e))
            return ConversionServiceResult(
                error_message=f"Conversion failed: {str(e)}",
                conversion_version=self.app_config.app_version,
            )

        return self._convert(schema, field_metadata, log)

    def convert_schema(self, schema: Any, field_metadata: Optional[Mapping[str, FieldMetadata]] = None) -> ConversionServiceResult:
        """Converts a bare schema tree with an optional metadata table."""
        return self._convert(schema, dict(field_metadata or {}), self.logger)

    def _convert(self, schema: Any, field_metadata: Dict[str, FieldMetadata], log: structlog.stdlib.BoundLogger) -> ConversionServiceResult:
        openapi_schema = schema_to_openapi(schema, field_metadata)
        issues = self._inspect(openapi_schema, field_metadata)
        for issue in issues:
            if issue.severity == ValidationSeverity.ERROR:
                log.error(issue.message, path=issue.path)
            elif issue.severity == ValidationSeverity.WARNING:
                log.warning(issue.message, path=issue.path)
            else:
                log.info(issue.message, path=issue.path)
        log.info(
            "Model converted to OpenAPI schema.",
            root_type=openapi_schema.get("type"),
            property_count=len(openapi_schema.get("properties") or {}),
            issue_count=len(issues),
        )
        return ConversionServiceResult(
            openapi_schema=openapi_schema,
            validation_issues=issues,
            conversion_version=self.app_config.app_version,
        )

    def _inspect(self, openapi_schema: Dict[str, Any], field_metadata: Dict[str, FieldMetadata]) -> List[ValidationIssue]:
        conversion = self.app_config.conversion
        issues: List[ValidationIssue] = []

        if not openapi_schema:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                message="Root schema could not be resolved; the result accepts any value.",
                path="/",
            ))
            return issues

        if conversion.warn_on_non_object_root and openapi_schema.get("type") != "object":
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                message="Converted root schema is not an object schema.",
                path="/",
                details={"type": openapi_schema.get("type")},
            ))

        properties = openapi_schema.get("properties")
        if not isinstance(properties, dict):
            return issues

        if conversion.report_untyped_fields:
            for name, field_schema in properties.items():
                if field_schema == {}:
                    issues.append(ValidationIssue(
                        severity=ValidationSeverity.INFO,
                        message=f"Field '{name}' could not be typed and accepts any value.",
                        path=f"/properties/{name}",
                    ))

        for name in field_metadata:
            if name not in properties:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    message=f"Metadata declared for field '{name}' which the schema does not define.",
                    path=f"/properties/{name}",
                ))
        return issues
