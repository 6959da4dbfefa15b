from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

bp = Blueprint("health", __name__)


def _active_rooms() -> int:
    return len(current_app.extensions["bingo_registry"])


@bp.get("/")
def index():
    return jsonify(
        {
            "status": "ok",
            "activeRooms": _active_rooms(),
            "message": "Bachelor Bingo server is running!",
        }
    )


@bp.get("/health")
def health():
    return jsonify(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "activeRooms": _active_rooms(),
        }
    )
