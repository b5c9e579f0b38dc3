"""Flask application factory.

The app exposes the freight quote endpoint defined in ``routes.quote``;
everything it needs comes from :class:`config.Config`."""
import logging

from flask import Flask

from config import Config
from routes.quote import quote_bp


def create_app(config_class: type[Config] = Config) -> Flask:
    """Application factory used by tests and ``__main__``."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if isinstance(level, int):
        app.logger.setLevel(level)

    app.register_blueprint(quote_bp)

    return app


app = create_app()

if __name__ == "__main__":  # pragma: no cover - manual run helper
    app.run(debug=True, host="0.0.0.0", port=5000)
