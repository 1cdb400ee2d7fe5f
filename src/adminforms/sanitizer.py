"""Submission filtering.

A submitted key is matched against the submitting section's own fields
first and only then against the first field with that name in any section.
This deliberately departs from a plain first-match-across-all-sections
lookup, which would let a same-named field elsewhere pick the sanitizer.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from . import sanitizers
from .consts import CHECKBOX_OFF, CHECKBOX_ON
from .schema import FieldSchema, Sanitizer as SanitizeFunc

logger = logging.getLogger(__name__)


class Sanitizer:
    """Cleans a submitted section before it is persisted.

    The field index is built once from the declarations. Keys with no
    declared field pass through unchanged unless ``drop_unknown_keys`` is set.
    Fields using the built-in ``checkbox`` sanitizer are normalized to the
    configured on/off pair.
    """

    def __init__(
        self,
        fields: Mapping[str, Iterable[FieldSchema]],
        *,
        drop_unknown_keys: bool = False,
        checkbox_on: str = CHECKBOX_ON,
        checkbox_off: str = CHECKBOX_OFF,
    ) -> None:
        self._drop_unknown_keys = drop_unknown_keys
        self._checkbox = sanitizers.checkbox_sanitizer(checkbox_on, checkbox_off)
        self._by_section: dict[str, dict[str, FieldSchema]] = {}
        self._first: dict[str, FieldSchema] = {}

        for section, section_fields in fields.items():
            index = self._by_section.setdefault(section, {})
            for field in section_fields:
                index.setdefault(field.name, field)
                self._first.setdefault(field.name, field)

    def get_field(self, name: str, section: str | None = None) -> FieldSchema | None:
        if section is not None:
            field = self._by_section.get(section, {}).get(name)
            if field is not None:
                return field
        return self._first.get(name)

    def _bind(self, field: FieldSchema) -> SanitizeFunc | None:
        callback = field.sanitize_callback
        if callback is sanitizers.checkbox:
            return self._checkbox
        return callback

    def get_sanitize_callback(self, name: str, section: str | None = None) -> SanitizeFunc | None:
        if not name:
            return None
        field = self.get_field(name, section)
        return self._bind(field) if field is not None else None

    def sanitize(self, section: str, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values

        cleaned: dict[str, Any] = {}
        for name, raw in values.items():
            field = self.get_field(name, section)
            if field is None:
                if self._drop_unknown_keys:
                    logger.warning(f"Dropping undeclared key '{name}' submitted for '{section}'")
                    continue
                logger.warning(f"Undeclared key '{name}' submitted for '{section}' kept as-is")
                cleaned[name] = raw
                continue

            callback = self._bind(field)
            cleaned[name] = callback(raw) if callback is not None else raw

        return cleaned
