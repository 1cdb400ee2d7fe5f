"""Entry point wiring a form declaration to a store, a host and a page."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from markupsafe import Markup

from .collaborators import MediaLibrary, PageLister, RichEditor
from .config import Config
from .errors import ConfigException
from .host import SettingsHost
from .page import SettingsPage
from .registry import FieldRegistry
from .renderer import Renderer
from .sanitizer import Sanitizer
from .schema import FieldSchema, SectionSchema
from .storages import MemoryOptionStore, OptionStore, get_option, get_store
from .templating import create_environment

logger = logging.getLogger(__name__)


class SettingsForms:
    """One settings screen: its declarations plus everything needed to serve it.

    Example:
        forms = SettingsForms(Config(), MemoryOptionStore())
        forms.add_section({"id": "basics", "title": "Basic Settings"})
        forms.add_field("basics", {"name": "title", "label": "Title"})
        forms.admin_init()

        html = forms.render_page()
        forms.update_option("basics", {"title": "<b>Hi</b>"})
    """

    def __init__(
        self,
        config: Config | None = None,
        store: OptionStore | None = None,
        *,
        media: MediaLibrary | None = None,
        pages: PageLister | None = None,
        editor: RichEditor | None = None,
    ) -> None:
        self.config = config or Config()
        self.store = store if store is not None else MemoryOptionStore()

        env = create_environment()
        self.registry = FieldRegistry()
        self.host = SettingsHost(self.store, env)

        renderer_kwargs: dict[str, Any] = {"env": env}
        if media is not None:
            renderer_kwargs["media"] = media
        if pages is not None:
            renderer_kwargs["pages"] = pages
        if editor is not None:
            renderer_kwargs["editor"] = editor
        self.renderer = Renderer.from_config(self.config, self.store, **renderer_kwargs)

        self.page = SettingsPage(self.registry, self.host, self.config, env)
        self.sanitizer: Sanitizer | None = None

    @classmethod
    def from_config(cls, config: Config, store: OptionStore | None = None, **kwargs) -> "SettingsForms":
        """Build forms from the sections and fields declared in the configuration."""
        forms = cls(config, store if store is not None else get_store(config), **kwargs)
        forms.registry.set_sections(config.sections).set_fields(config.fields)
        return forms

    def set_sections(self, sections: Iterable[SectionSchema | Mapping[str, Any]]) -> "SettingsForms":
        self.registry.set_sections(sections)
        return self

    def add_section(self, section: SectionSchema | Mapping[str, Any]) -> "SettingsForms":
        self.registry.add_section(section)
        return self

    def set_fields(self, fields: Mapping[str, Iterable[FieldSchema | Mapping[str, Any]]]) -> "SettingsForms":
        self.registry.set_fields(fields)
        return self

    def add_field(self, section: str, field: FieldSchema | Mapping[str, Any]) -> "SettingsForms":
        self.registry.add_field(section, field)
        return self

    def admin_init(self) -> Sanitizer:
        """Register all declarations; must run before rendering or saving."""
        self.sanitizer = self.registry.register(
            self.host,
            self.renderer,
            self.store,
            strict=self.config.strict_field_names,
            drop_unknown_keys=self.config.drop_unknown_keys,
            checkbox_on=self.config.checkbox_on_value,
            checkbox_off=self.config.checkbox_off_value,
        )
        return self.sanitizer

    def get_option(self, name: str, section: str, default: Any = False) -> Any:
        return get_option(self.store, name, section, default)

    def sanitize(self, section: str, values: Mapping[str, Any]) -> Any:
        if self.sanitizer is None:
            raise ConfigException("Forms are not registered, call admin_init() first")
        return self.sanitizer.sanitize(section, values)

    def update_option(self, section: str, values: Mapping[str, Any]) -> Any:
        return self.host.update_option(section, values)

    def render_page(self, title: str | None = None, notice: str | None = None) -> Markup:
        return self.page.render(title, notice)
