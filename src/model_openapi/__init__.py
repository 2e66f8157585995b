"""model-openapi - OpenAPI schema objects from the validation schemas of data models."""

__version__ = "0.1.0"

from .config import Config
from .schema_gen import model_to_openapi, schema_to_openapi

__all__ = ["Config", "model_to_openapi", "schema_to_openapi"]
