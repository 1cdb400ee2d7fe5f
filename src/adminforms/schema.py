from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import FieldType, Layout
from . import sanitizers
from .utils import field_key

logger = logging.getLogger(__name__)

Sanitizer = Callable[[Any], Any]


class SectionSchema(BaseModel):
    """A group of fields persisted together as one option record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    desc: str = Field(default="", validation_alias=AliasChoices("desc", "description"))
    callback: Optional[Callable[..., Any]] = None

    @field_validator("title", "desc", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class FieldSchema(BaseModel):
    """A single named, typed value inside a section.

    Only ``name`` is meaningful for storage; every other attribute falls
    back to an empty default so forms can be assembled incrementally.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    label: str = ""
    desc: str = Field(default="", validation_alias=AliasChoices("desc", "description"))
    type: FieldType = FieldType.TEXT
    default: Any = None
    options: Optional[dict[str, Any]] = None
    size: Optional[str | int] = None
    placeholder: str = ""
    min: Any = None
    max: Any = None
    step: Any = None
    sanitize_callback: Optional[Sanitizer] = Field(
        default=None, validation_alias=AliasChoices("sanitize_callback", "sanitizer")
    )
    callback: Optional[Callable[..., Any]] = None
    css_class: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("class", "css_class")
    )
    layout: Layout = Layout.VERTICAL

    @model_validator(mode="before")
    @classmethod
    def drop_unset(cls, values):
        if not isinstance(values, dict):
            return values
        return {k: v for k, v in values.items() if v is not None}

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v):
        return str(v)

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        if isinstance(v, FieldType):
            return v
        if v == "":
            return FieldType.TEXT
        try:
            return FieldType(v)
        except ValueError:
            raise ValueError(f"Unknown field type: {v!r}")

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, v):
        if v == "":
            return None
        if isinstance(v, (list, tuple)):
            return {str(item): item for item in v}
        if isinstance(v, dict):
            return {str(k): item for k, item in v.items()}
        return v

    @field_validator("sanitize_callback", mode="before")
    @classmethod
    def coerce_sanitizer(cls, v):
        if v == "":
            return None
        if isinstance(v, str):
            return sanitizers.resolve(v)
        if not callable(v):
            logger.warning(f"Ignoring non-callable sanitizer: {v!r}")
            return None
        return v


class RenderParameters(BaseModel):
    """Flat record handed to a renderer for one field."""

    model_config = ConfigDict(frozen=True)

    id: str
    css_class: str
    label_for: str
    desc: str = ""
    label: str = ""
    section: str
    size: Optional[str | int] = None
    options: dict[str, Any] = {}
    std: Any = ""
    sanitize_callback: Optional[Sanitizer] = None
    type: FieldType = FieldType.TEXT
    placeholder: str = ""
    min: Any = None
    max: Any = None
    step: Any = None
    layout: Layout = Layout.VERTICAL

    @classmethod
    def from_field(cls, section: str, field: FieldSchema) -> "RenderParameters":
        return cls(
            id=field.name,
            css_class=field.css_class or field.name,
            label_for=field_key(section, field.name),
            desc=field.desc,
            label=field.label,
            section=section,
            size=field.size,
            options=field.options or {},
            std=field.default if field.default is not None else "",
            sanitize_callback=field.sanitize_callback,
            type=field.type,
            placeholder=field.placeholder,
            min=field.min,
            max=field.max,
            step=field.step,
            layout=field.layout,
        )

    @property
    def key(self) -> str:
        return self.label_for


class FormDefinition(BaseModel):
    """Declarative form: sections plus the fields each one owns."""

    sections: list[SectionSchema] = []
    fields: dict[str, list[FieldSchema]] = {}
