"""Configuration file loading and validation."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import CHECKBOX_OFF, CHECKBOX_ON, OPTIONS_ENDPOINT
from .enums import StoreType
from .errors import ConfigException
from .schema import FieldSchema, FormDefinition, SectionSchema

logger = logging.getLogger(__name__)


class StoreConfig(BaseModel):
    """Option store configuration."""

    type: StoreType = StoreType.TOML
    # Defaults to data/options.toml or data/options.db depending on type
    path: Optional[str] = None


class WebConfig(BaseModel):
    """Settings page web service configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000, ge=1, le=65535)
    debug: bool = Field(default=False)
    title: str = Field(default="Settings")
    form_action: str = Field(default=OPTIONS_ENDPOINT)


class AssetsConfig(BaseModel):
    """Stylesheets and scripts the settings page links."""

    styles: list[str] = Field(default_factory=list)
    scripts: list[str] = Field(default_factory=list)
    media_scripts: list[str] = Field(default_factory=list)


class PageConfig(BaseModel):
    id: str
    title: str


class Config(BaseSettings):
    """Application configuration."""

    language: str = Field(default="en")
    checkbox_on_value: str = Field(default=CHECKBOX_ON, min_length=1)
    checkbox_off_value: str = Field(default=CHECKBOX_OFF)
    enqueue_media: bool = False
    strict_field_names: bool = True
    drop_unknown_keys: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    pages: list[PageConfig] = Field(default_factory=list)
    media: dict[str, str] = Field(default_factory=dict)

    sections: list[SectionSchema] = Field(default_factory=list)
    fields: dict[str, list[FieldSchema]] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix="ADMINFORMS_",
        env_nested_delimiter="__",
    )

    @field_validator("checkbox_off_value")
    @classmethod
    def validate_off_value(cls, v: str, info) -> str:
        if v == info.data.get("checkbox_on_value"):
            raise ValueError("checkbox_off_value must differ from checkbox_on_value")
        return v

    @field_validator("sections", mode="before")
    @classmethod
    def coerce_indexed_dict_to_list(cls, v):
        if v is None:
            return []
        if isinstance(v, dict):
            try:
                items = sorted(v.items(), key=lambda kv: int(kv[0]))
            except ValueError:
                return list(v.values())
            return [value for _key, value in items]
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="ADMINFORMS_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            raise ConfigException(format_validation_error(e)) from e

    def form_definition(self) -> FormDefinition:
        return FormDefinition(sections=self.sections, fields=self.fields)


def format_validation_error(e: ValidationError) -> str:
    lines = ["Configuration validation failed:"]
    for error in e.errors():
        loc = " -> ".join(str(item) for item in error.get("loc", []))
        msg = error.get("msg", "")
        lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")
    return "\n".join(lines)
