"""Host form-registration API.

The registry publishes sections, fields and settings here; the settings page
later asks the host to render a page's sections, and the submission handler
asks it to run a setting's filter before persisting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol

from jinja2 import Environment
from markupsafe import Markup

from .consts import TEMPLATE_SECTIONS
from .errors import ConfigException
from .schema import RenderParameters
from .storages.base import OptionStore
from .templating import create_environment

logger = logging.getLogger(__name__)


class FormHost(Protocol):
    def add_section(
        self, section_id: str, title: str, callback: Optional[Callable[..., Any]], page: str
    ) -> None: ...

    def add_field(
        self,
        key: str,
        label: str,
        callback: Callable[[RenderParameters], Any],
        page: str,
        section: str,
        params: RenderParameters,
    ) -> None: ...

    def register_setting(
        self, group: str, option_name: str, sanitize_callback: Optional[Callable[[Any], Any]] = None
    ) -> None: ...


@dataclass
class RegisteredSection:
    id: str
    title: str
    callback: Optional[Callable[..., Any]]
    page: str


@dataclass
class RegisteredField:
    key: str
    label: str
    callback: Callable[[RenderParameters], Any]
    page: str
    section: str
    params: RenderParameters


@dataclass
class RegisteredSetting:
    group: str
    option_name: str
    sanitize_callback: Optional[Callable[[Any], Any]] = None


@dataclass
class _Page:
    sections: dict[str, RegisteredSection] = field(default_factory=dict)
    fields: dict[str, dict[str, RegisteredField]] = field(default_factory=dict)


class SettingsHost:
    """Standalone implementation of the host form system."""

    def __init__(self, store: OptionStore, env: Environment | None = None) -> None:
        self._store = store
        self._env = env or create_environment()
        self._pages: dict[str, _Page] = {}
        self._settings: dict[str, RegisteredSetting] = {}
        self._actions: dict[str, list[Callable[..., Any]]] = {}

    def add_section(self, section_id, title, callback, page) -> None:
        self._pages.setdefault(page, _Page()).sections[section_id] = RegisteredSection(
            id=section_id, title=title, callback=callback, page=page
        )

    def add_field(self, key, label, callback, page, section, params) -> None:
        fields = self._pages.setdefault(page, _Page()).fields.setdefault(section, {})
        fields[key] = RegisteredField(
            key=key, label=label, callback=callback, page=page, section=section, params=params
        )

    def register_setting(self, group, option_name, sanitize_callback=None) -> None:
        self._settings[option_name] = RegisteredSetting(
            group=group, option_name=option_name, sanitize_callback=sanitize_callback
        )

    def get_sections(self, page: str) -> list[RegisteredSection]:
        return list(self._pages.get(page, _Page()).sections.values())

    def get_fields(self, page: str, section: str) -> list[RegisteredField]:
        return list(self._pages.get(page, _Page()).fields.get(section, {}).values())

    def is_registered(self, option_name: str | None) -> bool:
        return option_name is not None and option_name in self._settings

    def add_action(self, hook: str, callback: Callable[..., Any]) -> None:
        self._actions.setdefault(hook, []).append(callback)

    def do_action(self, hook: str, *args: Any) -> Markup:
        output = Markup("")
        for callback in self._actions.get(hook, []):
            result = callback(*args)
            if result:
                output += Markup(result)
        return output

    def render_field(self, registered: RegisteredField) -> Markup:
        return Markup(registered.callback(registered.params) or "")

    def render_sections(self, page: str) -> Markup:
        """Render every section registered for ``page`` with its fields."""
        sections = []
        for section in self.get_sections(page):
            intro = section.callback(section.id) if section.callback is not None else ""
            rows = [
                {
                    "label": registered.label,
                    "label_for": registered.params.label_for,
                    "css_class": registered.params.css_class,
                    "html": self.render_field(registered),
                }
                for registered in self.get_fields(page, section.id)
            ]
            sections.append(
                {"title": section.title, "intro": Markup(intro or ""), "rows": rows}
            )

        template = self._env.get_template(TEMPLATE_SECTIONS)
        return Markup(template.render(sections=sections))

    def update_option(self, option_name: str, values: Mapping[str, Any]) -> Any:
        """Filter submitted values through the setting's sanitizer and persist them.

        Raises:
            ConfigException: If no setting is registered under ``option_name``
                or the filtered values are not a mapping
        """
        setting = self._settings.get(option_name)
        if setting is None:
            raise ConfigException(f"Unknown setting: {option_name}")

        cleaned = values
        if setting.sanitize_callback is not None:
            cleaned = setting.sanitize_callback(values)

        if not isinstance(cleaned, Mapping):
            raise ConfigException(f"Values submitted for '{option_name}' must be a mapping")

        self._store.set(option_name, cleaned)
        logger.info(f"Updated option '{option_name}'")
        return cleaned
