"""Parsing of submitted form names.

Controls are named ``section[field]`` (or ``section[field][key]`` for
multi-value fields), so a flat list of submitted pairs folds back into
``{section: {field: value}}``. Later pairs win over earlier ones, which lets
a hidden companion input be overridden by the real control that follows it.
"""

import re
from typing import Any, Iterable

_SUBKEY = re.compile(r"\[([^\[\]]*)\]")


def split_name(name: str) -> list[str]:
    """Split a control name into its path.

    Examples:
        >>> split_name("basics[colors][red]")
        ['basics', 'colors', 'red']
        >>> split_name("option_page")
        ['option_page']
    """
    bracket = name.find("[")
    if bracket <= 0 or not name.endswith("]"):
        return [name]

    root, rest = name[:bracket], name[bracket:]
    keys = _SUBKEY.findall(rest)
    if "".join(f"[{k}]" for k in keys) != rest:
        return [name]
    return [root, *keys]


def _assign(target: dict, path: list[str], value: Any) -> None:
    key, rest = path[0], path[1:]
    if not rest:
        if key == "":
            key = str(len(target))
        target[key] = value
        return

    if key == "":
        key = str(len(target))
    child = target.get(key)
    if not isinstance(child, dict):
        child = {}
        target[key] = child
    _assign(child, rest, value)


def parse_submission(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Fold submitted ``(name, value)`` pairs into nested mappings.

    Examples:
        >>> parse_submission([("s[a]", "off"), ("s[a]", "on"), ("s[b]", "x")])
        {'s': {'a': 'on', 'b': 'x'}}
    """
    result: dict[str, Any] = {}
    for name, value in pairs:
        _assign(result, split_name(name), value)
    return result
