"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from .config import BaseConfig
from .db.session import db
from .api.health.routes import bp as health_bp
from .api.segments.routes import bp as segments_bp
from .api.users.routes import bp as users_bp
from .api.history.routes import bp as history_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .middleware import configure_logging, register_request_logging


def create_app(config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application."""
    config = config or BaseConfig()
    configure_logging(config.LOG_LEVEL)

    app = Flask(__name__)
    app.config.from_object(config)
    CORS(app, resources={r"/api/*": {"origins": config.CORS_ORIGINS}})

    # Init extensions
    db.init_app(app)

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api/health")
    app.register_blueprint(segments_bp, url_prefix="/api/segments")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(history_bp, url_prefix="/api/history")
    app.register_blueprint(docs_bp)

    register_request_logging(app)
    register_error_handlers(app)
    return app
