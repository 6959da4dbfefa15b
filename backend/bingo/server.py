from __future__ import annotations

import sys

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.registry import RoomRegistry
from .realtime.broadcaster import SocketIOBroadcaster
from .realtime.handlers import SessionCoordinator, register_socketio_handlers
from .realtime.timers import socketio_scheduler
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp


def _default_async_mode() -> str:
    # - Windows: threading (eventlet has known compatibility issues on newer Python)
    # - Python >= 3.13: threading (safer default)
    # - Otherwise: eventlet
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"


def create_app(config_class=Config, registry: RoomRegistry | None = None) -> tuple[Flask, SocketIO]:
    app = Flask(__name__)
    app.config.from_object(config_class)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=app.config.get("SOCKETIO_ASYNC_MODE") or _default_async_mode(),
    )

    if registry is None:
        registry = RoomRegistry(
            idle_timeout_sec=app.config.get("ROOM_IDLE_TIMEOUT_SEC", 30 * 60),
            scheduler=socketio_scheduler(socketio),
        )
    app.extensions["bingo_registry"] = registry

    app.register_blueprint(health_bp)
    app.register_blueprint(rooms_bp, url_prefix="/api")

    coordinator = SessionCoordinator(registry, SocketIOBroadcaster(socketio))
    register_socketio_handlers(socketio, coordinator)

    return app, socketio
