from flask import Flask, jsonify
from flask_cors import CORS


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object("task_service.config.Config")
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    app.json.sort_keys = False

    # Core extensions
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    from task_service.errors import register_error_handlers
    from task_service.utils import auth, db

    db.init_app(app)
    auth.init_app(app)
    register_error_handlers(app)

    # Register blueprints
    from task_service.routes.auth_routes import auth_bp
    from task_service.routes.task_routes import tasks_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    @app.get("/api/health")
    def health():
        return jsonify(status="ok", service="Task Tracker API"), 200

    return app
