"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Field types a form can declare; each maps to exactly one renderer."""

    TEXT = "text"
    URL = "url"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    MULTICHECK = "multicheck"
    RADIO = "radio"
    SELECT = "select"
    TEXTAREA = "textarea"
    HTML = "html"
    RICHTEXT = "richtext"
    FILE = "file"
    IMAGE = "image"
    PASSWORD = "password"
    COLOR = "color"
    PAGES = "pages"
    DIVIDER = "divider"
    REORDER = "reorder"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip()
            alias = _FIELD_TYPE_ALIASES.get(key) or _FIELD_TYPE_ALIASES.get(key.lower())
            if alias is not None:
                return cls(alias)
        return None


# Names used by older form declarations.
_FIELD_TYPE_ALIASES = {
    "wysiwyg": "richtext",
    "divisor": "divider",
    "pageReference": "pages",
    "page_reference": "pages",
    "pagereference": "pages",
    "reorderableList": "reorder",
    "reorderable_list": "reorder",
    "reorderablelist": "reorder",
}


class Layout(str, Enum):
    """Orientation of a reorderable list"""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class StoreType(str, Enum):
    MEMORY = "memory"
    TOML = "toml"
    DB = "db"
