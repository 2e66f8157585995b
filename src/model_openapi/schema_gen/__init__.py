"""
Schema generation: translates validation-schema trees of host data models
into OpenAPI schema objects.
"""
from .converter import extract_field_metadata, model_to_openapi, schema_to_openapi
from .introspection import NodeKind, classify, unwrap
from .schema_converter_service import ConversionServiceResult, SchemaConverterService
from .translator import SchemaTranslator

__all__ = [
    "ConversionServiceResult",
    "NodeKind",
    "SchemaConverterService",
    "SchemaTranslator",
    "classify",
    "extract_field_metadata",
    "model_to_openapi",
    "schema_to_openapi",
    "unwrap",
]
