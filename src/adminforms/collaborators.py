"""Host services the renderer delegates to.

The media library, the page listing and the rich text editor belong to the
application embedding the forms. The defaults here are static stand-ins good
enough for a standalone settings page and for tests.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol

from jinja2 import Environment
from markupsafe import Markup

from .templating import create_environment

logger = logging.getLogger(__name__)


class MediaLibrary(Protocol):
    def image_url(self, ref: Any) -> str | None: ...


class PageLister(Protocol):
    def pages(self) -> Iterable[tuple[str, str]]: ...


class RichEditor(Protocol):
    def render(self, value: Any, editor_id: str, settings: Mapping[str, Any]) -> Markup: ...


class StaticMediaLibrary:
    """Resolves image ids through a fixed id -> URL mapping.

    A reference that already looks like a URL resolves to itself.
    """

    def __init__(self, images: Mapping[str, str] | None = None) -> None:
        self._images = {str(k): v for k, v in (images or {}).items()}

    def image_url(self, ref: Any) -> str | None:
        if ref is None or ref == "":
            return None
        ref = str(ref)
        if ref in self._images:
            return self._images[ref]
        if ref.startswith(("http://", "https://", "/")):
            return ref
        logger.debug(f"No image found for reference: {ref}")
        return None


class StaticPageLister:
    def __init__(self, pages: Iterable[Any] | None = None) -> None:
        self._pages = [self._as_pair(p) for p in (pages or [])]

    @staticmethod
    def _as_pair(page: Any) -> tuple[str, str]:
        if isinstance(page, Mapping):
            return str(page["id"]), str(page["title"])
        if hasattr(page, "id") and hasattr(page, "title"):
            return str(page.id), str(page.title)
        page_id, title = page
        return str(page_id), str(title)

    def pages(self) -> list[tuple[str, str]]:
        return list(self._pages)


class TextareaEditor:
    """Plain textarea standing in for a client-side rich text editor."""

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or create_environment()

    def render(self, value: Any, editor_id: str, settings: Mapping[str, Any]) -> Markup:
        template = self._env.get_template("fields/richtext_editor.html")
        return Markup(
            template.render(
                value="" if value is None else value,
                editor_id=editor_id,
                settings=settings,
            )
        )
