import pytest

from adminforms.config import Config, StoreConfig
from adminforms.enums import StoreType
from adminforms.errors import ConfigException, DuplicateFieldError
from adminforms.forms import SettingsForms
from adminforms.storages import MemoryOptionStore, TomlOptionStore


@pytest.fixture
def forms():
    forms = SettingsForms(Config(), MemoryOptionStore())
    forms.set_sections([{"id": "basics", "title": "Basic Settings"}])
    forms.add_field("basics", {"name": "title", "label": "Title", "sanitizer": "html_escape"})
    forms.add_field("basics", {"name": "enabled", "type": "checkbox", "default": "on"})
    forms.admin_init()
    return forms


def test_declaration_methods_chain():
    forms = SettingsForms(Config(), MemoryOptionStore())

    result = forms.add_section({"id": "a"}).add_field("a", {"name": "x"})

    assert result is forms
    assert forms.registry.has_fields("a")


def test_admin_init_creates_section_record(forms):
    assert forms.store.get("basics") == {}


def test_get_option_reads_stored_value(forms):
    forms.store.set("basics", {"title": ""})

    assert forms.get_option("title", "basics", "fallback") == ""
    assert forms.get_option("missing", "basics", "fallback") == "fallback"
    assert forms.get_option("title", "nowhere") is False


def test_sanitize_before_admin_init_raises():
    forms = SettingsForms(Config(), MemoryOptionStore())
    with pytest.raises(ConfigException):
        forms.sanitize("basics", {})


def test_sanitize_and_update_option(forms):
    assert forms.sanitize("basics", {"title": "<script>"}) == {"title": "&lt;script&gt;"}

    forms.update_option("basics", {"title": "<script>", "enabled": "off"})

    assert forms.store.get("basics") == {"title": "&lt;script&gt;", "enabled": "off"}


def test_checkbox_round_trip(forms):
    forms.update_option("basics", {"enabled": "off"})
    assert 'checked="checked"' not in forms.render_page()

    forms.update_option("basics", {"enabled": "on"})
    assert 'checked="checked"' in forms.render_page()


def test_admin_init_honours_strict_field_names():
    forms = SettingsForms(Config(strict_field_names=True), MemoryOptionStore())
    forms.add_section({"id": "a"}).add_field("a", {"name": "x"}).add_field("a", {"name": "x"})

    with pytest.raises(DuplicateFieldError):
        forms.admin_init()


def test_admin_init_honours_drop_unknown_keys():
    forms = SettingsForms(Config(drop_unknown_keys=True), MemoryOptionStore())
    forms.add_section({"id": "a"}).add_field("a", {"name": "x"})
    forms.admin_init()

    assert forms.update_option("a", {"x": 1, "y": 2}) == {"x": 1}


def test_from_config_builds_declarations_and_store(tmp_path):
    config = Config(
        store=StoreConfig(type=StoreType.TOML, path=str(tmp_path / "options.toml")),
        sections=[{"id": "basics", "title": "Basics"}],
        fields={"basics": [{"name": "title", "type": "text"}]},
    )

    forms = SettingsForms.from_config(config)

    assert isinstance(forms.store, TomlOptionStore)
    assert [s.id for s in forms.registry.get_sections()] == ["basics"]
    assert forms.registry.get_fields("basics")[0].name == "title"


def test_checkbox_round_trip_with_configured_sentinels():
    forms = SettingsForms(
        Config(checkbox_on_value="1", checkbox_off_value="0"), MemoryOptionStore()
    )
    forms.add_section({"id": "s"}).add_field(
        "s", {"name": "c", "type": "checkbox", "sanitize_callback": "checkbox"}
    )
    forms.admin_init()

    forms.update_option("s", {"c": "1"})
    assert forms.get_option("c", "s") == "1"
    assert 'value="1" checked="checked"' in forms.render_page()

    forms.update_option("s", {"c": "0"})
    assert forms.get_option("c", "s") == "0"
    assert 'checked="checked"' not in forms.render_page()
