"""Tests for the settings page web routes."""

import json
from unittest.mock import patch

import pytest
from werkzeug.datastructures import MultiDict

from adminforms.config import Config
from adminforms.errors import StoreException
from adminforms.forms import SettingsForms
from adminforms.storages import MemoryOptionStore
from adminforms.web import create_app


@pytest.fixture
def forms():
    forms = SettingsForms(Config(), MemoryOptionStore())
    forms.set_sections(
        [{"id": "basics", "title": "Basics"}, {"id": "advanced", "title": "Advanced"}]
    )
    forms.set_fields(
        {
            "basics": [
                {"name": "title", "label": "Title", "sanitizer": "html_escape"},
                {"name": "enabled", "type": "checkbox"},
                {"name": "colors", "type": "multicheck", "options": {"red": "Red", "blue": "Blue"}},
            ],
            "advanced": [{"name": "count", "type": "number", "sanitizer": "absint"}],
        }
    )
    return forms


@pytest.fixture
def app(forms):
    app = create_app(forms=forms)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_create_app_registers_forms(app, forms):
    assert forms.sanitizer is not None
    assert forms.host.is_registered("basics")


def test_index_renders_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert b'name="basics[title]"' in response.data
    assert b'name="advanced[count]"' in response.data
    assert b"nav-tab-wrapper" in response.data
    assert b"Settings saved." not in response.data


def test_index_shows_saved_notice(client):
    response = client.get("/?settings-updated=true")
    assert b"Settings saved." in response.data


def test_save_options_sanitizes_and_redirects(client, forms):
    data = MultiDict(
        [
            ("option_page", "basics"),
            ("basics[title]", "<script>"),
            ("basics[enabled]", "off"),
            ("basics[enabled]", "on"),
            ("basics[colors]", ""),
            ("basics[colors][red]", "red"),
        ]
    )

    response = client.post("/options", data=data)

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/?settings-updated=true#basics")
    assert forms.store.get("basics") == {
        "title": "&lt;script&gt;",
        "enabled": "on",
        "colors": {"red": "red"},
    }


def test_save_unchecked_checkbox_stores_off_value(client, forms):
    data = MultiDict([("option_page", "basics"), ("basics[enabled]", "off")])

    client.post("/options", data=data)

    assert forms.get_option("enabled", "basics") == "off"
    page = client.get("/").data.decode()
    assert 'value="on" checked="checked"' not in page


def test_saved_checkbox_renders_checked(client):
    client.post("/options", data=MultiDict([("option_page", "basics"), ("basics[enabled]", "on")]))

    page = client.get("/").data.decode()

    assert 'value="on" checked="checked"' in page


def test_save_options_rejects_unknown_section(client):
    response = client.post("/options", data={"option_page": "nope", "nope[x]": "1"})

    assert response.status_code == 400
    assert json.loads(response.data)["success"] is False


def test_save_options_without_fields_stores_empty_record(client, forms):
    client.post("/options", data={"option_page": "advanced"})
    assert forms.store.get("advanced") == {}


def test_api_get_options(client, forms):
    forms.store.set("advanced", {"count": 3})

    response = client.get("/api/options/advanced")

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data == {"success": True, "data": {"count": 3}}


def test_api_get_unknown_section(client):
    response = client.get("/api/options/nope")
    assert response.status_code == 404


def test_api_post_options(client, forms):
    response = client.post(
        "/api/options/advanced",
        data=json.dumps({"count": "-12"}),
        content_type="application/json",
    )

    assert response.status_code == 200
    assert json.loads(response.data)["data"] == {"count": 12}
    assert forms.store.get("advanced") == {"count": 12}


def test_api_post_requires_object(client):
    response = client.post(
        "/api/options/advanced", data=json.dumps([1, 2]), content_type="application/json"
    )
    assert response.status_code == 400


def test_api_post_unknown_section(client):
    response = client.post(
        "/api/options/nope", data=json.dumps({"x": 1}), content_type="application/json"
    )

    assert response.status_code == 400
    assert "Unknown setting" in json.loads(response.data)["error"]


def test_create_app_from_config_file(tmp_path, monkeypatch):
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """
[store]
type = "memory"

[web]
title = "From File"

[[sections]]
id = "basics"

[[fields.basics]]
name = "title"
"""
    )
    monkeypatch.setenv("CONFIG_FILE", str(config_file))

    app = create_app()
    response = app.test_client().get("/")

    assert response.status_code == 200
    assert b"<title>From File</title>" in response.data


def test_store_failure_is_reported_as_bad_request(client, forms):
    with patch.object(forms.store, "set", side_effect=StoreException("disk full")):
        form_response = client.post("/options", data={"option_page": "advanced"})
        api_response = client.post(
            "/api/options/advanced",
            data=json.dumps({"count": "1"}),
            content_type="application/json",
        )

    for response in (form_response, api_response):
        assert response.status_code == 400
        assert json.loads(response.data)["error"] == "disk full"
