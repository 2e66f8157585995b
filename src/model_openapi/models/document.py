"""
JSON model documents: a host-model stand-in that can be stored on disk.

    {
      "name": "Books",
      "schema": {"def": {"type": "object", "shape": {...}}},
      "properties": {"title": {"propertyType": "Text", "config": {"required": true}}}
    }

The schema tree is kept as plain mappings; the translator reads it like any
other node tree.
"""
import json
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

from pydantic import Field, ValidationError

from ..exceptions import ModelDocumentError
from .common import BasePydanticModel


class PropertyDocument(BasePydanticModel):
    config: Dict[str, Any] = Field(default_factory=dict)
    property_type: Optional[str] = Field(default=None, alias="propertyType")

    def get_config(self) -> Dict[str, Any]:
        return dict(self.config)

    def get_property_type(self) -> Optional[str]:
        return self.property_type


class DocumentDefinition(NamedTuple):
    schema: Any
    properties: Dict[str, PropertyDocument]


class ModelDocument(BasePydanticModel):
    name: Optional[str] = None
    schema_tree: Any = Field(default=None, alias="schema")
    properties: Dict[str, PropertyDocument] = Field(default_factory=dict)

    def get_model_definition(self) -> DocumentDefinition:
        return DocumentDefinition(schema=self.schema_tree, properties=self.properties)

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> "ModelDocument":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ModelDocumentError("Model document is invalid.", path=path, details=e.errors()) from e

    @classmethod
    def from_file(cls, file_path: Path) -> "ModelDocument":
        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ModelDocumentError(f"Cannot read model document: {e}", path=str(file_path)) from e
        except json.JSONDecodeError as e:
            raise ModelDocumentError(f"Model document is not valid JSON: {e}", path=str(file_path)) from e
        document = cls.from_dict(data, path=str(file_path))
        if document.name is None:
            document = document.model_copy(update={"name": Path(file_path).stem})
        return document
