# sentinela/__init__.py

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from config import Config

db = SQLAlchemy()
jwt = JWTManager()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # -----------------------------
    # JWT / session handlers
    # -----------------------------
    @jwt.token_in_blocklist_loader
    def session_revoked(jwt_header, jwt_payload):
        from .services.auth_service import is_session_active

        return not is_session_active(jwt_payload.get("jti"))

    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "message": "Unauthorized",
                    "error": reason,
                }
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return (
            jsonify(
                {
                    "message": "Invalid session",
                    "error": reason,
                }
            ),
            401,
        )

    @jwt.revoked_token_loader
    def revoked_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Session has ended"}), 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Session has expired"}), 401

    # -----------------------------
    # Error handlers
    # -----------------------------
    from .errors import (
        ValidationError,
        ConflictError,
        AuthenticationError,
        NotFoundError,
    )

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(ConflictError)
    def handle_conflict(e):
        return jsonify({"message": e.message}), 400

    @app.errorhandler(AuthenticationError)
    def handle_auth_error(e):
        return jsonify({"message": e.message}), 401

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"message": e.message}), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        db.session.rollback()
        app.logger.exception(f"Unhandled error: {e}")
        return jsonify({"message": "Internal server error"}), 500

    # -----------------------------
    # IMPORT BLUEPRINTS (all routes)
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.profile_routes import profile_bp
    from .routes.entry_routes import entries_bp
    from .routes.stats_routes import stats_bp
    from .routes.ranking_routes import ranking_bp
    from .routes.achievement_routes import achievements_bp
    from .routes.dashboard_routes import dashboard_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(profile_bp, url_prefix="/api/profile")
    app.register_blueprint(entries_bp, url_prefix="/api/daily-entries")
    app.register_blueprint(stats_bp, url_prefix="/api/monthly-stats")
    app.register_blueprint(ranking_bp, url_prefix="/api/ranking")
    app.register_blueprint(achievements_bp, url_prefix="/api/achievements")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    from . import models  # noqa: F401

    with app.app_context():
        db.create_all()

    return app
