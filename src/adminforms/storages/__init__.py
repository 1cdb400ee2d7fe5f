from adminforms.config import Config
from adminforms.consts import DATABASE_PATH, TOML_STORE_PATH_DEFAULT
from adminforms.db import create_tables, init_db
from adminforms.enums import StoreType
from adminforms.errors import ConfigException

from .base import OptionStore, get_option
from .db import DBOptionStore
from .file import TomlOptionStore
from .memory import MemoryOptionStore

__all__ = [
    "DBOptionStore",
    "MemoryOptionStore",
    "OptionStore",
    "TomlOptionStore",
    "get_option",
    "get_store",
]


def get_store(config: Config) -> OptionStore:
    store_type = config.store.type

    if store_type == StoreType.MEMORY:
        return MemoryOptionStore()

    if store_type == StoreType.TOML:
        return TomlOptionStore(config.store.path or TOML_STORE_PATH_DEFAULT)

    if store_type == StoreType.DB:
        init_db(config.store.path or DATABASE_PATH)
        create_tables()
        return DBOptionStore()

    raise ConfigException(f"Unknown option store type: {store_type}")
