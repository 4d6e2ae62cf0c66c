from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from kvcontext.domain.formats import ExportFormat

# Config models map YAML sections to typed structures; defaults reproduce an unconfigured Context.


class JsonSettings(BaseModel):
    # Pretty JSON indentation; compact output never indents.
    model_config = ConfigDict(extra="forbid")
    indent: int = Field(default=2, ge=0)
    ensure_ascii: bool = False


class TomlSettings(BaseModel):
    # Array item indentation used by pretty TOML.
    model_config = ConfigDict(extra="forbid")
    indent: int = Field(default=4, ge=0)


class YamlSettings(BaseModel):
    # PyYAML only honors indents in 2..9.
    model_config = ConfigDict(extra="forbid")
    indent: int = Field(default=2, ge=2, le=9)
    allow_unicode: bool = True


class ExportSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    formats: list[ExportFormat] = Field(default_factory=lambda: list(ExportFormat))
    key_order: Literal["insertion", "sorted"] = "insertion"
    bytes_encoding: Literal["array", "base64"] = Field(
        default="array", validation_alias=AliasChoices("bytes", "bytes_encoding")
    )
    toml_none: Literal["omit", "error"] = "omit"
    json_settings: JsonSettings = Field(
        default_factory=JsonSettings, validation_alias=AliasChoices("json", "json_settings")
    )
    toml_settings: TomlSettings = Field(
        default_factory=TomlSettings, validation_alias=AliasChoices("toml", "toml_settings")
    )
    yaml_settings: YamlSettings = Field(
        default_factory=YamlSettings, validation_alias=AliasChoices("yaml", "yaml_settings")
    )

    @field_validator("formats", mode="before")
    @classmethod
    def _normalize_formats(cls, value: object) -> object:
        # Accept a single format name as shorthand for a one-item list.
        if isinstance(value, str):
            return [value]
        return value

    def is_enabled(self, fmt: ExportFormat) -> bool:
        return fmt in self.formats


class AppConfig(BaseModel):
    # Root config: version and export section.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    export: ExportSettings = Field(default_factory=ExportSettings)
