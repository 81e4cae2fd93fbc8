from datetime import datetime, timezone

from bson import ObjectId

from task_service.models.task_model import Task
from task_service.models.user_model import User
from task_service.utils.db import isoformat, to_object_id


def test_user_profile_never_exposes_password():
    user = User.create("  Alice ", " Alice@Example.com", "secret123")
    user.id = ObjectId()
    assert user.public_profile() == {"_id": str(user.id), "name": "Alice", "email": "alice@example.com"}
    assert user.check_password("secret123")
    assert not user.check_password("secret124")


def test_task_json_shape():
    owner = ObjectId()
    task = Task(title="Buy milk", description="Two litres", user_id=owner, id=ObjectId())
    data = task.to_json()
    assert list(data) == ["_id", "title", "description", "status", "user", "createdAt", "updatedAt"]
    assert data["user"] == str(owner)
    assert data["status"] == "pending"
    assert data["createdAt"].endswith("Z")


def test_task_document_round_trip_keeps_owner():
    task = Task(title="A", description="B", user_id=ObjectId(), id=ObjectId())
    assert Task.from_document(task.to_document()) == task


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(str(oid)) == oid
    assert to_object_id("nope") is None
    assert to_object_id(None) is None


def test_isoformat_treats_naive_as_utc():
    naive = datetime(2024, 1, 2, 3, 4, 5)
    aware = naive.replace(tzinfo=timezone.utc)
    assert isoformat(naive) == isoformat(aware) == "2024-01-02T03:04:05Z"
