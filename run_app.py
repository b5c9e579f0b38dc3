"""Launcher for the freight quote API.

Serves the Flask app defined in ``flask_app.py``; ``HOST`` and ``PORT``
override the bind address.
"""

import os

from flask_app import app


if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")))
