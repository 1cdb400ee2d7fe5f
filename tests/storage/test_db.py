from unittest.mock import patch

import pytest
from peewee import OperationalError

from adminforms import db
from adminforms.errors import StoreException
from adminforms.storages.db import DBOptionStore


@pytest.fixture
def store(tmp_path):
    db.init_db(str(tmp_path / "options.db"))
    db.create_tables()
    yield DBOptionStore()
    db.close_db()


def test_set_and_get(store):
    assert store.get("basics") is None
    assert not store.exists("basics")

    store.set("basics", {"title": "Hi", "colors": {"red": "red"}})

    assert store.exists("basics")
    assert store.get("basics") == {"title": "Hi", "colors": {"red": "red"}}


def test_set_replaces_record(store):
    store.set("basics", {"title": "Hi"})
    store.set("basics", {"title": "Bye"})

    assert store.get("basics") == {"title": "Bye"}


def test_empty_record(store):
    store.set("basics", {})
    assert store.get("basics") == {}


def test_read_failure_raises_store_exception(store):
    with patch("adminforms.storages.db.Option") as option_model:
        option_model.get_or_none.side_effect = OperationalError("disk I/O error")

        with pytest.raises(StoreException, match="Failed to read option"):
            store.get("basics")


def test_get_database_requires_init(monkeypatch):
    monkeypatch.setattr(db, "database", None)

    with pytest.raises(StoreException):
        db.get_database()
