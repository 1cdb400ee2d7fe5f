import logging
import shutil
from pathlib import Path
from typing import Any, Mapping

import tomlkit
from tomlkit.exceptions import TOMLKitError

from ..errors import StoreException

logger = logging.getLogger(__name__)


def _to_toml(value: Any) -> Any:
    # TOML has no null; unset entries are simply left out.
    if isinstance(value, Mapping):
        return {str(k): _to_toml(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_to_toml(v) for v in value if v is not None]
    return value


class TomlOptionStore:
    """Option records kept as top-level tables of one TOML file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> tomlkit.TOMLDocument:
        if not self._path.exists():
            return tomlkit.document()

        try:
            return tomlkit.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, TOMLKitError) as e:
            raise StoreException(f"Failed to read options from {self._path}: {e}") from e

    def _write(self, doc: tomlkit.TOMLDocument) -> None:
        temp_path = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
            shutil.move(str(temp_path), str(self._path))
        except OSError as e:
            raise StoreException(f"Failed to write options to {self._path}: {e}") from e

    def get(self, section: str) -> Mapping[str, Any] | None:
        doc = self._load()
        if section not in doc:
            return None
        value = doc[section]
        return value.unwrap() if hasattr(value, "unwrap") else value

    def set(self, section: str, values: Mapping[str, Any]) -> bool:
        doc = self._load()
        table = tomlkit.table()
        for key, value in _to_toml(values).items():
            table[key] = value
        doc[section] = table
        self._write(doc)
        logger.info(f"Saved section '{section}' to {self._path}")
        return True

    def exists(self, section: str) -> bool:
        return section in self._load()
