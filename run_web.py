#!/usr/bin/env python
"""Web server startup script for local development."""

import os
import sys
from pathlib import Path

from adminforms.config import Config
from adminforms.i18n import initialize
from adminforms.log import setup as setup_log
from adminforms.web import create_app


def main():
    """Start the web server."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config.toml"

    if not Path(config_path).exists():
        print(f"Configuration file not found: {config_path}")
        sys.exit(1)

    config = Config.load_from_file(config_path)
    setup_log()
    initialize(ui_language=config.language)

    host = config.web.host
    port = config.web.port

    print(f"Starting web service on http://{host}:{port}")
    print("Press Ctrl+C to stop")

    os.environ["CONFIG_FILE"] = config_path

    app = create_app(config)
    app.run(host=host, port=port, debug=config.web.debug, use_reloader=False)


if __name__ == "__main__":
    main()
