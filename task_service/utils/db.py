from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import ASCENDING, DESCENDING, MongoClient


def init_app(app):
    """Attach a lazily-created MongoDB client to ``app``.

    The client is built on first use so importing or creating the app never
    blocks on the network; it is closed when the process tears the app down.
    """
    app.extensions["mongo"] = {"client": None, "indexed": False}


def _state():
    return current_app.extensions["mongo"]


def get_client():
    state = _state()
    if state["client"] is None:
        state["client"] = MongoClient(
            current_app.config["MONGO_URI"],
            serverSelectionTimeoutMS=current_app.config.get("MONGO_TIMEOUT_MS", 2000),
            tz_aware=True,
        )
    return state["client"]


def get_db():
    state = _state()
    db = get_client()[current_app.config["MONGO_DB_NAME"]]
    if not state["indexed"]:
        ensure_indexes(db)
        state["indexed"] = True
    return db


def close_client(app):
    state = app.extensions.get("mongo")
    if state and state["client"] is not None:
        state["client"].close()
        state["client"] = None
        state["indexed"] = False


def ensure_indexes(db):
    # Emails are stored lower-cased, so a plain unique index is case-insensitive.
    db.users.create_index([("email", ASCENDING)], unique=True)
    db.tasks.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])


def to_object_id(value):
    """Parse ``value`` into an ObjectId, returning None for malformed ids.

    A None id never matches a stored document, so owner-scoped lookups with
    a malformed id fall through to the same "not found" path.
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def utcnow():
    # BSON datetimes carry millisecond precision
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def isoformat(value):
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
