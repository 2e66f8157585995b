"""Configuration management for model-openapi."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel): # Nested under Config (BaseSettings)
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format ('json' or 'console')")
    file: Optional[Path] = Field(default=None, description="Log file path")


class ConversionConfig(BaseModel):
    """Configuration for the schema conversion service and CLI output."""

    warn_on_non_object_root: bool = Field(default=True, description="Report a warning issue when the converted root schema is not an object.")
    report_untyped_fields: bool = Field(default=True, description="Report an info issue for root properties that converted to an empty schema.")
    output_indent: int = Field(default=2, ge=0, le=8, description="Indentation used when writing converted schemas as JSON.")


class Config(BaseSettings):
    """Main configuration. Loads from environment variables prefixed with MODEL_OPENAPI_."""

    model_config = SettingsConfigDict(
        env_prefix='MODEL_OPENAPI_',
        env_nested_delimiter='__', # e.g., MODEL_OPENAPI_CONVERSION__OUTPUT_INDENT
        extra='ignore',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    app_name: str = Field(default="model-openapi", description="Name reported in logs.")
    app_version: str = Field(default="0.1.0", description="Version recorded in conversion results.")

    @classmethod
    def from_file(cls, file_path: Path) -> "Config":
        """Create configuration strictly from a JSON file.
        Environment variables are not layered on top of the file values.
        """
        with open(file_path) as f:
            config_data = json.load(f)
        return cls.model_validate(config_data)
