import os

from flask import Flask, jsonify
from flask_cors import CORS


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object("timeyogi.config.Config")
    # keep Task fields in declaration order
    app.json.sort_keys = False
    if overrides:
        app.config.update(overrides)

    # Core extensions
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Shared MongoDB client
    from timeyogi.utils.db import init_app as init_db

    init_db(app)

    # Register blueprints
    from timeyogi.routes.task_routes import tasks_bp

    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    @app.get("/health")
    def health():
        return jsonify(status="ok", service="TimeYogi API"), 200

    @app.errorhandler(404)
    def not_found(_):
        return jsonify(error="Not Found"), 404

    @app.errorhandler(500)
    def server_error(_):
        return jsonify(error="Server error"), 500

    return app


if __name__ == "__main__":
    # Direct run support: python -m timeyogi.app
    create_app().run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "5001")),
        debug=os.environ.get("FLASK_DEBUG", "1") == "1",
    )
