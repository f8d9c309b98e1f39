"""
project: Mouse Maze
module: server.py
License: MIT

Server bootstrap helpers.

Exposes helpers to start the Socket.IO server and to configure stdlib logging
(console plus a rotating file in the instance folder).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from mazegame import create_app, socketio
from mazegame.logging_utils import forward_to_stdlib

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Start the Socket.IO server and ensure DB tables exist.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    app = create_app()
    with app.app_context():
        _configure_logging()
    try:
        print(f"[INFO] Starting Socket.IO server on {host}:{port} (async_mode={socketio.async_mode})")
        socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir=None, level=logging.INFO):
    """Configure logging to both console and a rotating file.

    The file path will be <instance>/app.log. Retains a few backups to avoid growth.
    Safe to call repeatedly: existing root handlers are replaced. Structured
    events from mazegame.logging_utils are forwarded here from then on.
    """
    if log_dir is None:
        from mazegame import app

        log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(level)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    # structured game events follow into app.log
    forward_to_stdlib()
    return log_path
