"""Settings page assembly: tab navigation, one form per section, client script."""

from __future__ import annotations

import logging

from jinja2 import Environment
from markupsafe import Markup

from .config import Config
from .consts import (
    HOOK_FORM_BOTTOM,
    HOOK_FORM_TOP,
    OPTION_PAGE_FIELD,
    TEMPLATE_FORMS,
    TEMPLATE_NAVIGATION,
    TEMPLATE_PAGE,
    TEMPLATE_SCRIPT,
)
from .host import SettingsHost
from .registry import FieldRegistry
from .templating import create_environment

logger = logging.getLogger(__name__)


class SettingsPage:
    def __init__(
        self,
        registry: FieldRegistry,
        host: SettingsHost,
        config: Config,
        env: Environment | None = None,
    ) -> None:
        self._registry = registry
        self._host = host
        self._config = config
        self._env = env or create_environment()

    def assets(self) -> dict[str, list[str]]:
        scripts = list(self._config.assets.scripts)
        if self._config.enqueue_media:
            scripts.extend(self._config.assets.media_scripts)
        return {"styles": list(self._config.assets.styles), "scripts": scripts}

    def show_navigation(self) -> Markup:
        """One tab per section, in declaration order; nothing for a single section."""
        sections = self._registry.get_sections()
        if len(sections) < 2:
            return Markup("")

        template = self._env.get_template(TEMPLATE_NAVIGATION)
        return Markup(template.render(sections=sections))

    def show_forms(self) -> Markup:
        forms = []
        for section in self._registry.get_sections():
            forms.append(
                {
                    "id": section.id,
                    "top": self._host.do_action(HOOK_FORM_TOP.format(section=section.id), section),
                    "body": self._host.render_sections(section.id),
                    "bottom": self._host.do_action(
                        HOOK_FORM_BOTTOM.format(section=section.id), section
                    ),
                    "submit": self._registry.has_fields(section.id),
                }
            )

        template = self._env.get_template(TEMPLATE_FORMS)
        return Markup(
            template.render(
                forms=forms,
                action=self._config.web.form_action,
                option_page_field=OPTION_PAGE_FIELD,
            )
        )

    def script(self) -> Markup:
        template = self._env.get_template(TEMPLATE_SCRIPT)
        body = template.render(enqueue_media=self._config.enqueue_media)
        return Markup("<script>\n{}\n</script>").format(Markup(body))

    def render(self, title: str | None = None, notice: str | None = None) -> Markup:
        template = self._env.get_template(TEMPLATE_PAGE)
        return Markup(
            template.render(
                title=title or self._config.web.title,
                notice=notice,
                language=self._config.language,
                assets=self.assets(),
                navigation=self.show_navigation(),
                forms=self.show_forms(),
                script=self.script(),
            )
        )
