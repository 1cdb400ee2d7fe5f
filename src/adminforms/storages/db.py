import logging
from typing import Any, Mapping

from peewee import PeeweeException

from .. import db
from ..errors import StoreException
from ..models import Option

logger = logging.getLogger(__name__)


class DBOptionStore:
    """Option records kept as JSON rows of the ``options`` table."""

    def get(self, section: str) -> Mapping[str, Any] | None:
        try:
            row = Option.get_or_none(Option.name == section)
        except PeeweeException as e:
            raise StoreException(f"Failed to read option '{section}': {e}") from e
        return row.value if row is not None else None

    def set(self, section: str, values: Mapping[str, Any]) -> bool:
        try:
            with db.get_database().atomic():
                row = Option.get_or_none(Option.name == section)
                if row is None:
                    Option.create(name=section, value=dict(values))
                else:
                    row.value = dict(values)
                    row.save()
        except PeeweeException as e:
            raise StoreException(f"Failed to write option '{section}': {e}") from e

        logger.info(f"Saved section '{section}' to database")
        return True

    def exists(self, section: str) -> bool:
        try:
            return Option.select().where(Option.name == section).exists()
        except PeeweeException as e:
            raise StoreException(f"Failed to read option '{section}': {e}") from e
