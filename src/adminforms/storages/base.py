from typing import Any, Mapping, Protocol


class OptionStore(Protocol):
    """Key-value persistence with one record per section id."""

    def get(self, section: str) -> Mapping[str, Any] | None: ...

    def set(self, section: str, values: Mapping[str, Any]) -> bool: ...

    def exists(self, section: str) -> bool: ...


def get_option(store: OptionStore, name: str, section: str, default: Any = False) -> Any:
    """Return the stored value of one field.

    ``default`` is returned when the store has no record for ``section`` or
    the record has no key ``name``; otherwise the stored value is returned
    exactly, even when it is falsy.
    """
    options = store.get(section)
    if isinstance(options, Mapping) and name in options:
        return options[name]
    return default
