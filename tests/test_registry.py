from unittest.mock import Mock

import pytest

from adminforms.enums import FieldType
from adminforms.errors import ConfigException, DuplicateFieldError, UnknownFieldTypeError
from adminforms.host import SettingsHost
from adminforms.registry import FieldRegistry
from adminforms.renderer import Renderer
from adminforms.schema import FieldSchema, FormDefinition, SectionSchema
from adminforms.storages import MemoryOptionStore


@pytest.fixture
def store():
    return MemoryOptionStore()


@pytest.fixture
def host(store):
    return SettingsHost(store)


@pytest.fixture
def renderer(store):
    return Renderer(store)


def test_add_field_fills_defaults_for_undeclared_section():
    registry = FieldRegistry().add_field("later", {"name": "title"})

    field = registry.get_fields("later")[0]
    assert field.type == FieldType.TEXT
    assert field.label == ""
    assert registry.has_fields("later")
    assert registry.get_sections() == []


def test_set_sections_replaces_and_add_section_appends():
    registry = FieldRegistry().set_sections([{"id": "a"}, {"id": "b"}])
    registry.add_section(SectionSchema(id="c"))
    assert [s.id for s in registry.get_sections()] == ["a", "b", "c"]

    registry.set_sections([{"id": "z"}])
    assert [s.id for s in registry.get_sections()] == ["z"]


def test_get_fields_without_section_returns_all():
    registry = FieldRegistry().set_fields({"a": [{"name": "x"}], "b": [{"name": "y"}]})

    fields = registry.get_fields()
    assert list(fields) == ["a", "b"]
    assert registry.get_fields("missing") == []


def test_from_definition():
    definition = FormDefinition(
        sections=[SectionSchema(id="basics")],
        fields={"basics": [FieldSchema(name="title")]},
    )

    registry = FieldRegistry.from_definition(definition)

    assert registry.get_sections()[0].id == "basics"
    assert registry.get_fields("basics")[0].name == "title"


def test_unknown_type_fails_at_declaration():
    with pytest.raises(UnknownFieldTypeError):
        FieldRegistry().add_field("basics", {"name": "x", "type": "slider"})


def test_invalid_section_raises_config_exception():
    with pytest.raises(ConfigException):
        FieldRegistry().add_section({"title": "No id"})


def test_register_rejects_duplicate_names(host, renderer, store):
    registry = FieldRegistry().set_sections([{"id": "basics"}])
    registry.add_field("basics", {"name": "title"}).add_field("basics", {"name": "title"})

    with pytest.raises(DuplicateFieldError) as excinfo:
        registry.register(host, renderer, store)

    assert excinfo.value.section == "basics"
    assert excinfo.value.name == "title"


def test_register_allows_duplicates_when_not_strict(host, renderer, store):
    registry = FieldRegistry().set_sections([{"id": "basics"}])
    registry.add_field("basics", {"name": "title"}).add_field("basics", {"name": "title"})

    registry.register(host, renderer, store, strict=False)

    assert len(host.get_fields("basics", "basics")) == 1


def test_register_creates_missing_section_records(host, renderer):
    store = MemoryOptionStore({"existing": {"title": "kept"}})
    registry = FieldRegistry().set_sections([{"id": "existing"}, {"id": "fresh"}])

    registry.register(host, renderer, store)

    assert store.get("fresh") == {}
    assert store.get("existing") == {"title": "kept"}


def test_register_publishes_sections_fields_and_settings(host, renderer, store):
    registry = FieldRegistry().set_sections([{"id": "basics", "title": "Basics"}])
    registry.add_field("basics", {"name": "title", "label": "Title", "sanitizer": "html_escape"})

    registry.register(host, renderer, store)

    sections = host.get_sections("basics")
    assert [(s.id, s.title) for s in sections] == [("basics", "Basics")]

    registered = host.get_fields("basics", "basics")[0]
    assert registered.key == "basics[title]"
    assert registered.label == "Title"
    assert registered.params.label_for == "basics[title]"
    assert registered.callback == renderer.render_text

    assert host.is_registered("basics")
    assert host.update_option("basics", {"title": "<b>"}) == {"title": "&lt;b&gt;"}


def test_register_uses_custom_field_callback(host, renderer, store):
    custom = Mock(return_value="<em>custom</em>")
    registry = FieldRegistry().set_sections([{"id": "s"}])
    registry.add_field("s", {"name": "x", "callback": custom})

    registry.register(host, renderer, store)

    assert host.get_fields("s", "s")[0].callback is custom


def test_register_calls_host_in_order(renderer, store):
    host = Mock()
    registry = FieldRegistry().set_sections([{"id": "s", "title": "S"}])
    registry.add_field("s", {"name": "a"})

    registry.register(host, renderer, store)

    host.add_section.assert_called_once()
    args = host.add_section.call_args.args
    assert args[0] == "s"
    assert args[1] == "S"
    assert args[3] == "s"

    key, label, callback, page, section, params = host.add_field.call_args.args
    assert (key, page, section) == ("s[a]", "s", "s")
    assert params.id == "a"

    group, option_name, sanitize = host.register_setting.call_args.args
    assert (group, option_name) == ("s", "s")
    assert sanitize({"a": "1"}) == {"a": "1"}


def test_section_description_becomes_intro(host, renderer, store):
    registry = FieldRegistry().set_sections([{"id": "s", "desc": "<strong>Read me</strong>"}])

    registry.register(host, renderer, store)

    section = host.get_sections("s")[0]
    assert section.callback("s") == '<div class="inside"><strong>Read me</strong></div>'


def test_section_without_description_uses_its_callback(host, renderer, store):
    intro = Mock(return_value="<p>hi</p>")
    registry = FieldRegistry().set_sections([{"id": "s", "callback": intro}])

    registry.register(host, renderer, store)

    assert host.get_sections("s")[0].callback is intro
