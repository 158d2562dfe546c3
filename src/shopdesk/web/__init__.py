# shopdesk/web/__init__.py
from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, current_app, g, render_template

from shopdesk.database.factories import create_database
from shopdesk.domain.entities import parse_spend_basis
from shopdesk.settings import Config


def get_db():
    """Accessor for the current request, created on first use."""
    if "db" not in g:
        db = create_database(
            database_url=current_app.config.get("DATABASE_URL"),
            database_path=current_app.config.get("DATABASE_PATH"),
        )
        db.connect()
        g.db = db
    return g.db


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)
    app.config["BUDGET_SPEND_BASIS"] = parse_spend_basis(app.config.get("BUDGET_SPEND_BASIS")).value

    # ======================
    # Schema
    # ======================
    with app.app_context():
        get_db().initialize_schema()

    # ======================
    # Per-request accessor
    # ======================
    @app.teardown_appcontext
    def close_db(exc):
        db = g.pop("db", None)
        if db is not None:
            db.disconnect()

    # ======================
    # Register Blueprints
    # ======================
    from .routes import main

    app.register_blueprint(main)

    # ======================
    # Template helpers
    # ======================
    from shopdesk.utils.amount_parser import format_currency

    @app.template_filter("money")
    def money_filter(value):
        return format_currency(value, app.config["CURRENCY"])

    # ======================
    # Not found handler
    # ======================
    @app.errorhandler(404)
    def not_found(e):
        return render_template("404.html"), 404

    return app
