"""Field renderers.

Every field type maps to one render method through a dispatch table built
when the renderer is created. A render method takes the field's
``RenderParameters``, reads the current value from the option store and
returns markup whose primary control is named ``section[field]``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from jinja2 import Environment
from markupsafe import Markup

from .collaborators import (
    MediaLibrary,
    PageLister,
    RichEditor,
    StaticMediaLibrary,
    StaticPageLister,
    TextareaEditor,
)
from .consts import (
    CHECKBOX_OFF,
    CHECKBOX_ON,
    RICHTEXT_ROWS,
    RICHTEXT_WIDTH_DEFAULT,
    SIZE_DEFAULT,
    TEXTAREA_COLS,
    TEXTAREA_ROWS,
    TEMPLATE_FIELD_DIR,
)
from .enums import FieldType, Layout
from .errors import UnknownFieldTypeError
from .i18n import gettext as _
from .schema import RenderParameters
from .storages.base import OptionStore, get_option
from .templating import create_environment
from .utils import apply_saved_order, is_blank

logger = logging.getLogger(__name__)

RenderFunc = Callable[[RenderParameters], Markup]


class Renderer:
    def __init__(
        self,
        store: OptionStore,
        *,
        checkbox_on: str = CHECKBOX_ON,
        checkbox_off: str = CHECKBOX_OFF,
        media: MediaLibrary | None = None,
        pages: PageLister | None = None,
        editor: RichEditor | None = None,
        env: Environment | None = None,
    ) -> None:
        self._store = store
        self._checkbox_on = checkbox_on
        self._checkbox_off = checkbox_off
        self._env = env or create_environment()
        self._media = media or StaticMediaLibrary()
        self._pages = pages or StaticPageLister()
        self._editor = editor or TextareaEditor(self._env)

        self._renderers: dict[FieldType, RenderFunc] = {
            FieldType.TEXT: self.render_text,
            FieldType.URL: self.render_text,
            FieldType.NUMBER: self.render_number,
            FieldType.CHECKBOX: self.render_checkbox,
            FieldType.MULTICHECK: self.render_multicheck,
            FieldType.RADIO: self.render_radio,
            FieldType.SELECT: self.render_select,
            FieldType.TEXTAREA: self.render_textarea,
            FieldType.HTML: self.render_html,
            FieldType.RICHTEXT: self.render_richtext,
            FieldType.FILE: self.render_file,
            FieldType.IMAGE: self.render_image,
            FieldType.PASSWORD: self.render_password,
            FieldType.COLOR: self.render_color,
            FieldType.PAGES: self.render_pages,
            FieldType.DIVIDER: self.render_divider,
            FieldType.REORDER: self.render_reorder,
        }

        missing = [t.value for t in FieldType if t not in self._renderers]
        if missing:
            raise UnknownFieldTypeError(f"No renderer for field type(s): {', '.join(missing)}")

    @classmethod
    def from_config(cls, config, store: OptionStore, **kwargs) -> "Renderer":
        kwargs.setdefault("media", StaticMediaLibrary(config.media))
        kwargs.setdefault("pages", StaticPageLister(config.pages))
        return cls(
            store,
            checkbox_on=config.checkbox_on_value,
            checkbox_off=config.checkbox_off_value,
            **kwargs,
        )

    def resolve(self, field_type: FieldType | str) -> RenderFunc:
        """Return the render function for a field type.

        Raises:
            UnknownFieldTypeError: If the type is not a known FieldType
        """
        try:
            return self._renderers[FieldType(field_type)]
        except (ValueError, KeyError):
            raise UnknownFieldTypeError(f"Unknown field type: {field_type!r}")

    def render(self, field_type: FieldType | str, params: RenderParameters) -> Markup:
        return self.resolve(field_type)(params)

    def emit(
        self,
        field_type: FieldType | str,
        params: RenderParameters,
        write: Callable[[str], Any],
    ) -> None:
        """Write a field's markup to ``write`` instead of returning it."""
        write(self.render(field_type, params))

    def get_option(self, name: str, section: str, default: Any = False) -> Any:
        return get_option(self._store, name, section, default)

    def field_description(self, params: RenderParameters) -> Markup:
        if not params.desc:
            return Markup("")
        return Markup('<p class="description">{}</p>').format(Markup(params.desc))

    def _value(self, params: RenderParameters) -> Any:
        return self.get_option(params.id, params.section, params.std)

    def _size(self, params: RenderParameters, default: str = SIZE_DEFAULT) -> Any:
        return default if is_blank(params.size) else params.size

    def _render_template(self, name: str, params: RenderParameters, **context: Any) -> Markup:
        template = self._env.get_template(f"{TEMPLATE_FIELD_DIR}/{name}.html")
        return Markup(
            template.render(
                args=params,
                description=self.field_description(params),
                **context,
            )
        )

    def render_text(self, params: RenderParameters) -> Markup:
        input_type = "url" if params.type == FieldType.URL else "text"
        return self._render_template(
            "text",
            params,
            input_type=input_type,
            value=_scalar(self._value(params)),
            size=self._size(params),
        )

    def render_number(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "number",
            params,
            value=_scalar(self._value(params)),
            size=self._size(params),
            bounds={
                attr: getattr(params, attr)
                for attr in ("min", "max", "step")
                if not is_blank(getattr(params, attr))
            },
        )

    def render_checkbox(self, params: RenderParameters) -> Markup:
        value = self._value(params)
        return self._render_template(
            "checkbox",
            params,
            checked=_scalar(value) == self._checkbox_on,
            on_value=self._checkbox_on,
            off_value=self._checkbox_off,
        )

    def render_multicheck(self, params: RenderParameters) -> Markup:
        value = self._value(params)
        flags = value if isinstance(value, Mapping) else {}
        checked = {key for key in params.options if _is_checked(flags.get(key), key)}
        return self._render_template("multicheck", params, checked=checked)

    def render_radio(self, params: RenderParameters) -> Markup:
        return self._render_template("radio", params, value=_scalar(self._value(params)))

    def render_select(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "select",
            params,
            value=_scalar(self._value(params)),
            size=self._size(params),
        )

    def render_textarea(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "textarea",
            params,
            value=_scalar(self._value(params)),
            size=self._size(params),
            rows=TEXTAREA_ROWS,
            cols=TEXTAREA_COLS,
        )

    def render_html(self, params: RenderParameters) -> Markup:
        return self.field_description(params)

    def render_richtext(self, params: RenderParameters) -> Markup:
        settings = {
            "teeny": True,
            "textarea_name": params.label_for,
            "textarea_rows": RICHTEXT_ROWS,
        }
        settings.update(params.options)
        editor = self._editor.render(_scalar(self._value(params)), params.label_for, settings)
        return self._render_template(
            "richtext",
            params,
            editor=editor,
            width=self._size(params, RICHTEXT_WIDTH_DEFAULT),
        )

    def render_file(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "file",
            params,
            value=_scalar(self._value(params)),
            size=self._size(params),
            button_label=params.options.get("button_label") or _("Choose File"),
        )

    def render_image(self, params: RenderParameters) -> Markup:
        value = _scalar(self._value(params))
        return self._render_template(
            "image",
            params,
            value=value,
            size=self._size(params),
            image_url=self._media.image_url(value) or "",
            button_label=params.options.get("button_label") or _("Choose Image"),
            clear_label=_("Remove image"),
        )

    def render_password(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "password",
            params,
            value=_scalar(self._value(params)),
            size=self._size(params),
        )

    def render_color(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "color",
            params,
            value=_scalar(self._value(params)),
            size=self._size(params),
        )

    def render_pages(self, params: RenderParameters) -> Markup:
        return self._render_template(
            "pages",
            params,
            value=_scalar(self._value(params)),
            pages=self._pages.pages(),
        )

    def render_divider(self, params: RenderParameters) -> Markup:
        return self._render_template("divider", params)

    def render_reorder(self, params: RenderParameters) -> Markup:
        saved = _scalar(self._value(params))
        items = apply_saved_order(params.options, saved)

        limit = _limit(params.size)
        if limit is not None:
            items = dict(list(items.items())[:limit])

        return self._render_template(
            "reorder",
            params,
            value=saved,
            items=items,
            display="block" if params.layout == Layout.VERTICAL else "inline-block",
        )


def _scalar(value: Any) -> Any:
    if value is None or value is False:
        return ""
    return value


def _is_checked(flag: Any, key: str) -> bool:
    if flag is True:
        return True
    return flag is not None and str(flag) == str(key)


def _limit(size: Any) -> int | None:
    if isinstance(size, bool):
        return None
    if isinstance(size, int):
        return max(size, 0)
    if isinstance(size, str) and size.strip().isdigit():
        return int(size.strip())
    return None
