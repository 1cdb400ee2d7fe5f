import copy
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class MemoryOptionStore:
    def __init__(self, initial: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._data: dict[str, dict[str, Any]] = {
            section: dict(values) for section, values in (initial or {}).items()
        }

    def get(self, section: str) -> Mapping[str, Any] | None:
        values = self._data.get(section)
        return copy.deepcopy(values) if values is not None else None

    def set(self, section: str, values: Mapping[str, Any]) -> bool:
        self._data[section] = copy.deepcopy(dict(values))
        logger.debug(f"Stored {len(values)} option(s) for section '{section}'")
        return True

    def exists(self, section: str) -> bool:
        return section in self._data
