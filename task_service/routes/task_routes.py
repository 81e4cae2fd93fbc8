from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import current_user, verify_jwt_in_request
from pymongo import DESCENDING, ReturnDocument

from task_service.errors import NotFoundError, ValidationError
from task_service.models.task_model import STATUS_PENDING, TASK_STATUSES, Task
from task_service.utils.db import get_db, to_object_id, utcnow
from task_service.utils.validation import clean_text, get_payload


tasks_bp = Blueprint("tasks", __name__)

TASK_NOT_FOUND = "Task not found"


@tasks_bp.before_request
def require_identity():
    # Every task route is private; token problems short-circuit with 401 here.
    verify_jwt_in_request()


def _owned(task_id):
    """Filter matching ``task_id`` only when the caller owns it."""
    return {"_id": to_object_id(task_id), "user_id": current_user.id}


def _check_status(status):
    if status not in TASK_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(TASK_STATUSES)}")
    return status


def _collect_updates(payload):
    updates = {}
    # Falsy values mean "leave as is"; a field can't be cleared through this route.
    for name in ("title", "description"):
        value = clean_text(payload, name)
        if value:
            updates[name] = value
    if payload.get("status"):
        updates["status"] = _check_status(payload["status"])
    updates["updated_at"] = utcnow()
    return updates


@tasks_bp.get("", strict_slashes=False)
def list_tasks():
    cursor = get_db().tasks.find({"user_id": current_user.id}).sort(
        [("created_at", DESCENDING), ("_id", DESCENDING)]
    )
    return jsonify([Task.from_document(d).to_json() for d in cursor]), 200


@tasks_bp.get("/<task_id>")
def get_task(task_id):
    doc = get_db().tasks.find_one(_owned(task_id))
    if not doc:
        raise NotFoundError(TASK_NOT_FOUND)
    return jsonify(Task.from_document(doc).to_json()), 200


@tasks_bp.post("", strict_slashes=False)
def create_task():
    payload = get_payload()
    title = clean_text(payload, "title")
    description = clean_text(payload, "description")
    if not title or not description:
        raise ValidationError("Title and description are required")
    status = _check_status(payload.get("status") or STATUS_PENDING)

    task = Task(title=title, description=description, status=status, user_id=current_user.id)
    task.id = get_db().tasks.insert_one(task.to_document()).inserted_id
    current_app.logger.debug("User %s created task %s", current_user.id, task.id)
    return jsonify(task.to_json()), 201


@tasks_bp.put("/<task_id>")
def update_task(task_id):
    tasks = get_db().tasks
    try:
        updates = _collect_updates(get_payload())
    except ValidationError:
        # Bad input only surfaces once the filter matches; otherwise it's a 404 like any miss.
        if not tasks.find_one(_owned(task_id), {"_id": 1}):
            raise NotFoundError(TASK_NOT_FOUND)
        raise

    doc = tasks.find_one_and_update(
        _owned(task_id),
        {"$set": updates},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise NotFoundError(TASK_NOT_FOUND)
    return jsonify(Task.from_document(doc).to_json()), 200


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    doc = get_db().tasks.find_one_and_delete(_owned(task_id))
    if not doc:
        raise NotFoundError(TASK_NOT_FOUND)
    return jsonify(message="Task deleted successfully", id=str(doc["_id"])), 200
