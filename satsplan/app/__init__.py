"""Application factory and app-wide configuration."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from satsplan.app.api.routes import api_bp
from satsplan.app.config import DefaultConfig


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance.

    Configuration is layered: DefaultConfig, then SATSPLAN_* environment
    variables, then the explicit ``config`` mapping.
    """
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env("SATSPLAN")
    if config:
        app.config.update(config)

    logging.getLogger("satsplan").setLevel(app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
