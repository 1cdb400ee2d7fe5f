"""In-memory declaration store for sections and fields."""

from __future__ import annotations

import logging
from collections import Counter
from functools import partial
from typing import Any, Iterable, Mapping

from markupsafe import Markup
from pydantic import ValidationError

from .config import format_validation_error
from .consts import CHECKBOX_OFF, CHECKBOX_ON
from .errors import ConfigException, DuplicateFieldError, UnknownFieldTypeError
from .host import FormHost
from .renderer import Renderer
from .sanitizer import Sanitizer
from .schema import FieldSchema, FormDefinition, RenderParameters, SectionSchema
from .storages.base import OptionStore

logger = logging.getLogger(__name__)


def _build(model, data: Any):
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        if any(error.get("loc", ())[:1] == ("type",) for error in e.errors()):
            raise UnknownFieldTypeError(format_validation_error(e)) from e
        raise ConfigException(format_validation_error(e)) from e


class FieldRegistry:
    def __init__(self) -> None:
        self._sections: list[SectionSchema] = []
        self._fields: dict[str, list[FieldSchema]] = {}

    @classmethod
    def from_definition(cls, definition: FormDefinition) -> "FieldRegistry":
        return cls().set_sections(definition.sections).set_fields(definition.fields)

    def set_sections(self, sections: Iterable[SectionSchema | Mapping[str, Any]]) -> "FieldRegistry":
        self._sections = [_build(SectionSchema, s) for s in sections]
        return self

    def add_section(self, section: SectionSchema | Mapping[str, Any]) -> "FieldRegistry":
        self._sections.append(_build(SectionSchema, section))
        return self

    def get_sections(self) -> list[SectionSchema]:
        return list(self._sections)

    def set_fields(
        self, fields: Mapping[str, Iterable[FieldSchema | Mapping[str, Any]]]
    ) -> "FieldRegistry":
        self._fields = {
            section: [_build(FieldSchema, f) for f in section_fields]
            for section, section_fields in fields.items()
        }
        return self

    def add_field(self, section: str, field: FieldSchema | Mapping[str, Any]) -> "FieldRegistry":
        """Append a field to a section, filling unset attributes with defaults.

        The section does not have to be declared yet.
        """
        self._fields.setdefault(section, []).append(_build(FieldSchema, field))
        return self

    def get_fields(self, section: str | None = None):
        if section is None:
            return {s: list(fields) for s, fields in self._fields.items()}
        return list(self._fields.get(section, []))

    def has_fields(self, section: str) -> bool:
        return bool(self._fields.get(section))

    def check_duplicates(self) -> None:
        for section, fields in self._fields.items():
            counts = Counter(field.name for field in fields)
            for name, count in counts.items():
                if count > 1:
                    raise DuplicateFieldError(section, name)

    def register(
        self,
        host: FormHost,
        renderer: Renderer,
        store: OptionStore,
        *,
        strict: bool = True,
        drop_unknown_keys: bool = False,
        checkbox_on: str = CHECKBOX_ON,
        checkbox_off: str = CHECKBOX_OFF,
    ) -> Sanitizer:
        """Publish every declaration to the host and bind the sanitizer.

        Ensures each section has a record in the store, resolves each field's
        renderer and hands the host a flat parameter record per field.

        Raises:
            DuplicateFieldError: If ``strict`` and a section repeats a field name
            UnknownFieldTypeError: If a field type has no renderer
        """
        if strict:
            self.check_duplicates()

        for section in self._sections:
            if not store.exists(section.id):
                store.set(section.id, {})
                logger.info(f"Created empty option record for section '{section.id}'")

            host.add_section(section.id, section.title, _section_callback(section), section.id)

        for section, fields in self._fields.items():
            for field in fields:
                callback = field.callback or renderer.resolve(field.type)
                params = RenderParameters.from_field(section, field)
                host.add_field(params.label_for, field.label, callback, section, section, params)
                logger.debug(f"Registered field {params.label_for} ({field.type.value})")

        sanitizer = Sanitizer(
            self._fields,
            drop_unknown_keys=drop_unknown_keys,
            checkbox_on=checkbox_on,
            checkbox_off=checkbox_off,
        )
        for section in self._sections:
            host.register_setting(section.id, section.id, partial(sanitizer.sanitize, section.id))

        logger.info(
            f"Registered {len(self._sections)} section(s) and "
            f"{sum(len(f) for f in self._fields.values())} field(s)"
        )
        return sanitizer


def _section_callback(section: SectionSchema):
    if section.desc:
        intro = Markup('<div class="inside">{}</div>').format(Markup(section.desc))
        return lambda _section_id: intro
    if section.callback is not None:
        return section.callback
    return None
