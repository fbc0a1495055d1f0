"""SpendScope application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestingConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestingConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered with the app."""

    yield "spendscope.blueprints.dashboard"
    yield "spendscope.blueprints.ledger"
    yield "spendscope.blueprints.planning"


def create_app(config_name: str | None = None, *, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["SPENDSCOPE_CONFIG"] = config_obj

    # Deferred so importing the package does not pull in Flask extensions or models.
    from .extensions import init_db
    from .logging_config import setup_logging

    if not config_obj.TESTING:
        setup_logging(config_obj)

    _register_blueprints(app)
    init_db(app)

    from . import cli

    cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "create_app"]
