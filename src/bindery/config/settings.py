"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
persistent discoveries.

Usage:
    from bindery.config import DiscoverySettings

    # Load from environment variables (BINDERY_*)
    settings = DiscoverySettings()

    # Or override with explicit values
    settings = DiscoverySettings(json_path="var/discovery.json", json_indent=2)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiscoverySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for discoveries and their storage.

    Attributes:
        json_path: File used by JsonDiscovery.
        json_indent: Indentation of the JSON document (None for compact output).
        generated_path: Module file written by PythonDiscoveryStorage.
        generated_class_name: Name of the generated discovery class.

    Environment Variables:
        BINDERY_JSON_PATH
        BINDERY_JSON_INDENT
        BINDERY_GENERATED_PATH
        BINDERY_GENERATED_CLASS_NAME
    """

    model_config = SettingsConfigDict(
        env_prefix="BINDERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    json_path: str | None = None
    json_indent: int | None = Field(default=4, ge=0)
    generated_path: str | None = None
    generated_class_name: str = "GeneratedDiscovery"

    @field_validator("generated_class_name")
    @classmethod
    def _check_class_name(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f'"{value}" is not a valid class name')
        return value
