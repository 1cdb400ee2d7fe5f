"""Utility functions for adminforms"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from .consts import ORDER_SEPARATOR

logger = logging.getLogger(__name__)


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def field_key(section: str, name: str) -> str:
    """Return the control name/id shared by the form and the submission.

    Examples:
        >>> field_key("basics", "title")
        'basics[title]'
    """
    return f"{section}[{name}]"


def parse_order(saved: Any) -> list[str]:
    """Split a persisted comma-separated order into item keys.

    An empty or missing value yields an empty list, which means
    "keep the declared order".
    """
    if saved is None:
        return []
    if isinstance(saved, (list, tuple)):
        return [str(item) for item in saved if str(item)]
    return [part.strip() for part in str(saved).split(ORDER_SEPARATOR) if part.strip()]


def join_order(keys: Iterable[Any]) -> str:
    return ORDER_SEPARATOR.join(str(k) for k in keys)


def apply_saved_order(items: Mapping[str, Any], saved: Any) -> dict[str, Any]:
    """Reorder ``items`` according to a previously saved order.

    Keys present in the saved order come first, in saved order. Keys the
    saved order does not mention keep their declared relative order after
    them. Saved keys that are no longer declared are ignored.

    Examples:
        >>> list(apply_saved_order({"a": 1, "b": 2, "c": 3}, "c,a"))
        ['c', 'a', 'b']
    """
    order = parse_order(saved)
    if not order:
        return dict(items)

    # Repeated keys keep their first position.
    rank = {key: position for position, key in enumerate(dict.fromkeys(order))}

    fallback = len(rank)
    keys = sorted(items, key=lambda k: rank.get(str(k), fallback))
    return {k: items[k] for k in keys}


def is_blank(value: Any) -> bool:
    return value is None or value == ""
