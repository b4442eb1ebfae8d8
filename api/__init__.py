import logging

import click
from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from models import storage, search_index  # DBStorage and SearchIndex singletons
from models.author import Author
from models.book import Book

logger = logging.getLogger(__name__)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Bookshelf API",
        "version": "1.0.0",
        "description": "REST API for managing authors and books, with paging and full-text search.",
    },
    "basePath": "/",  # Blueprints are mounted under /api
    "schemes": ["http"],
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}

INDEXED_CLASSES = (Author, Book)


def reindex() -> dict:
    """Rebuild the in-memory search index from the durable store."""
    counts = {}
    for cls in INDEXED_CLASSES:
        counts[cls.__name__] = search_index.rebuild(cls, storage.all(cls).values())
    return counts


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
      - Easier testing (create an isolated app per test)
      - Environment-based configuration
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))

    # Cross-Origin Resource Sharing: expose the paging and alert headers to the browser client
    name = app.config["APP_NAME"]
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        expose_headers=["Location", "Link", "X-Total-Count",
                        f"X-{name}-alert", f"X-{name}-params", f"X-{name}-error"],
    )

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers
    register_error_handlers(app)

    from .health import bp as health_bp
    from .authors import bp as authors_bp
    from .books import bp as books_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(authors_bp, url_prefix="/api")
    app.register_blueprint(books_bp, url_prefix="/api")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.cli.command("reindex")
    def reindex_command():
        """Rebuild the search index from the database."""
        for cls_name, total in reindex().items():
            click.echo(f"{cls_name}: {total} documents indexed")

    if app.config.get("REINDEX_ON_STARTUP"):
        with app.app_context():
            logger.info("Search index rebuilt: %s", reindex())

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Bookshelf API",
            "docs": "/apidocs/",
            "health": "/api/health",
        }, 200

    return app
