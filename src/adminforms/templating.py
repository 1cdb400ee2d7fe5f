from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .i18n import gettext as _

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals["_"] = _
    return env
