"""
project: roomweaver
module: __init__.py
License: MIT

Flask application factory for the layout service.

The web layer is a thin collaborator around ``roomweaver.dungeon``: it holds
the active generation config, lets a client edit it, and serves the generated
rooms/corridors/edges for drawing. Configuration is sourced from environment
variables (optionally via a local .env file).
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so ROOMWEAVER_* generation defaults can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    JSON_SORT_KEYS=False,
    # Layout generation flags
    ROOMWEAVER_ENABLE_GENERATION_METRICS=bool(os.getenv("ROOMWEAVER_ENABLE_METRICS", "1") == "1"),
)

# Register HTTP blueprints (import after app is created)
from roomweaver.routes.dungeon_api import bp_dungeon  # noqa: E402

app.register_blueprint(bp_dungeon)


def create_app():
    """Return the Flask app instance."""
    return app


# Error handling: log details under a short id the client can report back
@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
