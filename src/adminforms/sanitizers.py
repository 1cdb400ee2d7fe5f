"""Named sanitizer functions usable from form declarations.

A sanitizer takes the raw submitted value of one field and returns the value
to persist. Declarations loaded from TOML refer to them by name, e.g.
``sanitize_callback = "html_escape"``.
"""

import logging
import re
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

from markupsafe import Markup, escape

from .consts import CHECKBOX_OFF, CHECKBOX_ON
from .utils import join_order, parse_order

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")
_WHITESPACE = re.compile(r"\s+")
_ALLOWED_URL_SCHEMES = ("http", "https", "ftp", "ftps", "mailto")


def html_escape(value: Any) -> Any:
    """Escape ``&``, ``<``, ``>``, and quotes.

    Examples:
        >>> html_escape("<script>")
        '&lt;script&gt;'
    """
    if not isinstance(value, str):
        return value
    return str(escape(value))


def strip_tags(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return str(Markup(value).striptags())


def text_field(value: Any) -> Any:
    """Single-line text: tags removed, whitespace collapsed, trimmed."""
    if not isinstance(value, str):
        return value
    return _WHITESPACE.sub(" ", strip_tags(value)).strip()


def absint(value: Any) -> int:
    try:
        return abs(int(float(value)))
    except (TypeError, ValueError):
        return 0


def url(value: Any) -> str:
    """Keep a URL only if it uses an allowed scheme (or is relative)."""
    value = str(value or "").strip()
    if not value:
        return ""
    scheme = urlsplit(value).scheme.lower()
    if scheme and scheme not in _ALLOWED_URL_SCHEMES:
        logger.debug(f"Dropping URL with disallowed scheme: {scheme}")
        return ""
    return value


def hex_color(value: Any) -> str:
    value = str(value or "").strip()
    return value if _HEX_COLOR.match(value) else ""


def checkbox_sanitizer(on_value: str = CHECKBOX_ON, off_value: str = CHECKBOX_OFF) -> Callable[[Any], str]:
    """Build a checkbox sanitizer for one pair of sentinels.

    Only ``on_value`` itself counts as checked; anything else, including
    other truthy spellings, is stored as ``off_value``.

    Examples:
        >>> checkbox_sanitizer("1", "0")("1")
        '1'
        >>> checkbox_sanitizer("1", "0")("on")
        '0'
    """

    def checkbox(value: Any) -> str:
        if isinstance(value, bool) or value is None:
            return off_value
        return on_value if str(value).strip() == on_value else off_value

    return checkbox


# Bound to the default sentinels; forms rebind it to their configured pair.
checkbox = checkbox_sanitizer()


def key_list(value: Any) -> str:
    """Comma-separated list of item keys, blanks and duplicates removed."""
    seen = []
    for key in parse_order(value):
        if key not in seen:
            seen.append(key)
    return join_order(seen)


SANITIZERS: dict[str, Callable[[Any], Any]] = {
    "html_escape": html_escape,
    "esc_html": html_escape,
    "strip_tags": strip_tags,
    "text_field": text_field,
    "sanitize_text_field": text_field,
    "absint": absint,
    "int": absint,
    "url": url,
    "esc_url_raw": url,
    "hex_color": hex_color,
    "sanitize_hex_color": hex_color,
    "checkbox": checkbox,
    "key_list": key_list,
}


def resolve(name: str) -> Optional[Callable[[Any], Any]]:
    """Look up a sanitizer by name; unknown names mean "no sanitizer"."""
    func = SANITIZERS.get(name.strip())
    if func is None:
        logger.warning(f"Unknown sanitizer '{name}', value will pass through unchanged")
    return func


def register(name: str, func: Callable[[Any], Any]) -> None:
    if not callable(func):
        raise TypeError(f"Sanitizer '{name}' is not callable")
    SANITIZERS[name] = func
