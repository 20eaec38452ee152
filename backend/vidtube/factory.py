"""Application factory wiring Flask extensions, adapters and blueprints."""

from __future__ import annotations

from flask import Flask

from vidtube.core.config import BaseConfig, get_config
from vidtube.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from vidtube.core import proxy

    proxy.init_app(app)

    from vidtube.core import extensions

    extensions.init_app(app)

    init_logging(app)

    # Immutable settings + token/media adapters built once per process
    from vidtube.core import settings
    from vidtube import infra

    settings.init_app(app)
    infra.init_app(app)

    from vidtube.core import cors

    cors.init_app(app)

    from vidtube.api import init_app as init_api

    init_api(app)

    from vidtube.core import errors

    errors.init_app(app)

    from vidtube import cli as app_cli

    app_cli.init_app(app)

    return app
