import logging
import os

try:
    from backend.bingo.server import create_app
except ImportError:  # pragma: no cover
    from bingo.server import create_app

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

# Gunicorn entrypoint: gunicorn -k eventlet -w 1 backend.wsgi:app
app, socketio = create_app()
