# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from userapi.infrastructure.container import Container
from userapi.infrastructure.db import init_db
from userapi.shared.config import AppConfig
from userapi.shared.logging import logger, setup_logging
from userapi.shared.middleware.error_handler import configure_error_handling
from userapi.shared.middleware.request_logger import configure_request_logging


def _configure_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    level = "DEBUG" if config.debug_logging else config.log_level
    setup_logging(level, log_file=config.log_file)

    init_db(container.engine)
    container.admin_setup.run()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["userapi.container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_resource = f"{config.api_prefix}/*" if config.api_prefix else "/*"
    CORS(
        app,
        resources={cors_resource: {"origins": config.security.allowed_origins}},
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    _configure_security_headers(app, config)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())

    logger.info(f"Flask app initialized (env={config.app_env}, prefix={config.api_prefix or '/'})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
