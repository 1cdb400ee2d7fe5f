"""Internationalization (i18n) support using gettext."""

import gettext as gettext_module
import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

DOMAIN = "adminforms"
LOCALE_DIR = Path(__file__).parent / "locales"

# Thread-local storage for translations
_thread_local = threading.local()

_initialized = False
_ui_language = "en"


def initialize(ui_language: str = "en") -> None:
    """Initialize translation system with language configuration.

    Call once at application startup, before rendering any form.

    Args:
        ui_language: Language code for built-in labels
    """
    global _initialized, _ui_language

    _ui_language = ui_language
    _initialized = True
    if hasattr(_thread_local, "translation"):
        del _thread_local.translation

    logger.info(f"Translation initialized: UI={ui_language}")


def _get_translation() -> gettext_module.NullTranslations:
    if not hasattr(_thread_local, "translation"):
        _thread_local.translation = _load_translation(_ui_language)
    return _thread_local.translation


def gettext(message: str) -> str:
    """Translate a built-in label.

    Args:
        message: Message to translate

    Returns:
        Translated message
    """
    return _get_translation().gettext(message)


def _load_translation(language: str | None = None) -> gettext_module.NullTranslations:
    if not language:
        return gettext_module.NullTranslations()

    try:
        translation = gettext_module.translation(
            domain=DOMAIN,
            localedir=str(LOCALE_DIR),
            languages=[language],
            fallback=True,
        )
        logger.debug(f"Loaded translation for language: {language}")
        return translation
    except Exception as e:
        logger.warning(
            f"Failed to load translation for {language}: {e}, using fallback"
        )
        return gettext_module.NullTranslations()
