"""Flask web service serving the settings page."""

import logging
import os

from flask import Blueprint, Flask, current_app, jsonify, redirect, request, url_for

from .config import Config
from .consts import OPTION_PAGE_FIELD
from .errors import AdminFormsException
from .forms import SettingsForms
from .i18n import gettext as _
from .wire import parse_submission

logger = logging.getLogger(__name__)

bp = Blueprint("web", __name__)


def create_app(config=None, forms=None):
    """Create and configure Flask application.

    Args:
        config: Application configuration (optional, loaded from CONFIG_FILE if not provided)
        forms: Already declared forms (optional, built from the configuration if not provided)

    Returns:
        Configured Flask application
    """
    if forms is None:
        if config is None:
            config_file = os.environ.get("CONFIG_FILE", "config.toml")
            config = Config.load_from_file(config_file)
        forms = SettingsForms.from_config(config)

    if forms.sanitizer is None:
        forms.admin_init()

    app = Flask(__name__)
    app.config["forms"] = forms

    app.register_blueprint(bp)
    app.add_url_rule(
        forms.config.web.form_action,
        endpoint="save_options",
        view_func=save_options,
        methods=["POST"],
    )

    return app


def _forms() -> SettingsForms:
    return current_app.config["forms"]


@bp.route("/")
def index():
    """Render the settings page."""
    notice = None
    if request.args.get("settings-updated") == "true":
        notice = _("Settings saved.")
    return _forms().render_page(notice=notice)


def save_options():
    """Persist one section submitted from the settings page."""
    forms = _forms()
    submitted = parse_submission(request.form.items(multi=True))

    option_page = request.form.get(OPTION_PAGE_FIELD)
    if not forms.host.is_registered(option_page):
        logger.warning(f"Rejected submission for unknown section: {option_page!r}")
        return jsonify({"success": False, "error": f"Unknown section: {option_page}"}), 400

    values = submitted.get(option_page)
    if not isinstance(values, dict):
        values = {}

    try:
        forms.update_option(option_page, values)
    except AdminFormsException as e:
        logger.error(f"Failed to save section '{option_page}': {e}")
        return jsonify({"success": False, "error": str(e)}), 400

    return redirect(url_for("web.index", **{"settings-updated": "true"}) + f"#{option_page}")


@bp.route("/api/options/<section>")
def get_options(section: str):
    """GET API endpoint - returns the stored values of one section."""
    forms = _forms()
    if not forms.host.is_registered(section):
        return jsonify({"success": False, "error": f"Unknown section: {section}"}), 404

    return jsonify({"success": True, "data": forms.store.get(section) or {}})


@bp.route("/api/options/<section>", methods=["POST"])
def post_options(section: str):
    """POST API endpoint - sanitizes and saves one section from JSON."""
    forms = _forms()
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({"success": False, "error": "No data provided"}), 400

    try:
        cleaned = forms.update_option(section, data)
    except AdminFormsException as e:
        return jsonify({"success": False, "error": str(e)}), 400

    return jsonify({"success": True, "data": cleaned})
