"""Blueprint registrations for application routes."""

from flask import Flask

from .catalog import blueprint as catalog_blueprint
from .localization import blueprint as localization_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(catalog_blueprint)
    app.register_blueprint(localization_blueprint)
