"""CLI main entry point."""

import json
import logging

import click

from .config import Config
from .db import close_db
from .errors import AdminFormsException
from .forms import SettingsForms
from .i18n import initialize
from .log import setup as setup_log
from .web import create_app

logger = logging.getLogger(__name__)


def load_forms(config_path: str) -> SettingsForms:
    """Load configuration and register the forms it declares."""
    logger.info(f"Loading configuration file: {config_path}")
    cfg = Config.load_from_file(config_path)

    initialize(ui_language=cfg.language)

    forms = SettingsForms.from_config(cfg)
    forms.admin_init()
    return forms


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.option("--log-file", default=None, help="Log file path")
@click.pass_context
def cli(ctx, config: str, log_file: str | None):
    """adminforms - declarative settings forms."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    setup_log(log_file, level=logging.WARNING)


@cli.command(name="render")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write HTML to file")
@click.option("--title", default=None, help="Page title")
@click.pass_context
def render(ctx, output: str | None, title: str | None):
    """Render the settings page as HTML."""
    try:
        forms = load_forms(ctx.obj["config_path"])
        html = forms.render_page(title)
    except AdminFormsException as e:
        logger.error(f"Application error: {e}", exc_info=True)
        raise click.ClickException(str(e))
    finally:
        close_db()

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(html)
        click.echo(f"Wrote {output}")
    else:
        click.echo(html)


@cli.command(name="fields")
@click.pass_context
def list_fields(ctx):
    """List declared sections and fields."""
    try:
        forms = load_forms(ctx.obj["config_path"])
    except AdminFormsException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()

    click.echo("section\tname\ttype\tlabel")
    for section, fields in forms.registry.get_fields().items():
        for field in fields:
            click.echo(f"{section}\t{field.name}\t{field.type.value}\t{field.label}")


@cli.command(name="get")
@click.argument("section")
@click.argument("name", required=False)
@click.pass_context
def get_value(ctx, section: str, name: str | None):
    """Print a section's stored values, or one field's value."""
    try:
        forms = load_forms(ctx.obj["config_path"])
        if name is None:
            value = forms.store.get(section) or {}
        else:
            value = forms.get_option(name, section, None)
    except AdminFormsException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()

    click.echo(json.dumps(value, ensure_ascii=False, indent=2))


@cli.command(name="set")
@click.argument("section")
@click.argument("name")
@click.argument("value")
@click.pass_context
def set_value(ctx, section: str, name: str, value: str):
    """Sanitize and store one field value (JSON accepted).

    Only the new value goes through the sanitizer; the section's other
    stored values are kept as they are.
    """
    try:
        forms = load_forms(ctx.obj["config_path"])
        if not forms.host.is_registered(section):
            raise click.ClickException(f"Unknown setting: {section}")

        cleaned = forms.sanitize(section, {name: _parse_value(value)})
        values = dict(forms.store.get(section) or {})
        values.update(cleaned)
        forms.store.set(section, values)
    except AdminFormsException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()

    click.echo(json.dumps(cleaned.get(name), ensure_ascii=False))


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.option("--debug/--no-debug", default=None, help="Enable/disable debug mode")
@click.pass_context
def serve(ctx, host, port, debug):
    """Start the settings page development server."""
    try:
        forms = load_forms(ctx.obj["config_path"])
        cfg = forms.config

        host = host or cfg.web.host
        port = port or cfg.web.port
        if debug is None:
            debug = cfg.web.debug

        if debug:
            logger.warning("Debug mode is enabled. This should NOT be used in production.")

        app = create_app(forms=forms)

        logger.info(f"Starting development server on {host}:{port}")
        app.run(host=host, port=port, debug=debug, use_reloader=False)

    except AdminFormsException as e:
        logger.error(f"Application error: {e}", exc_info=True)
        raise click.ClickException(str(e))
    finally:
        close_db()


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
