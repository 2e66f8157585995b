"""
Exceptions raised by the outer surfaces (document loading, CLI).
The schema translator itself never raises for malformed input.
"""
from typing import Any, Optional


class ModelOpenAPIError(Exception):
    """Base class for all model-openapi errors."""
    pass


class ModelDocumentError(ModelOpenAPIError):
    """Raised when a JSON model document cannot be read or does not validate."""
    def __init__(self, message: str, path: Optional[str] = None, details: Optional[Any] = None):
        full_message = f"{path}: {message}" if path else message
        super().__init__(full_message)
        self.path = path
        self.original_message = message
        self.details = details
