import os

from pymongo.errors import PyMongoError

from task_service.app import create_app
from task_service.utils.db import close_client, get_client


def check_database(app):
    # Ping up front so a misconfigured MONGO_URI shows in the startup log.
    with app.app_context():
        try:
            get_client().admin.command("ping")
            app.logger.info("MongoDB connected (%s)", app.config["MONGO_DB_NAME"])
        except PyMongoError as exc:
            app.logger.warning("MongoDB connection failed: %s", exc)


# Expose a module-level `app` for WSGI servers (gunicorn expects `app:app`).
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    check_database(app)
    try:
        app.run(
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "5000")),
            debug=app.config["DEBUG"],
        )
    finally:
        close_client(app)
