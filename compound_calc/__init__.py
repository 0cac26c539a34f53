"""Application factory and app-wide configuration."""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from compound_calc.api.routes import api_bp
from compound_calc.config import Settings
from compound_calc.config import settings as default_settings
from compound_calc.core.environment import check_environment
from compound_calc.core.history import HistoryStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or default_settings

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = Flask(__name__)
    app.config["DEBUG"] = settings.DEBUG
    app.config["SETTINGS"] = settings

    # history is optional: a failed check leaves the calculator usable
    status = check_environment(settings.HISTORY_DB_PATH)
    app.config["ENVIRONMENT_STATUS"] = status
    app.config["HISTORY_STORE"] = HistoryStore(settings.HISTORY_DB_PATH, limit=settings.HISTORY_LIMIT)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.CORS_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("%s started (history %s)", settings.APP_NAME, "enabled" if status.enabled else "disabled")
    return app
