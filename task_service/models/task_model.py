from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bson import ObjectId

from task_service.utils.db import isoformat, utcnow

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
TASK_STATUSES = (STATUS_PENDING, STATUS_COMPLETED)


@dataclass
class Task:
    title: str
    description: str
    user_id: ObjectId
    status: str = STATUS_PENDING  # pending | completed
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    id: Optional[ObjectId] = None

    def to_document(self):
        doc = {
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc):
        return cls(
            id=doc["_id"],
            title=doc["title"],
            description=doc["description"],
            status=doc.get("status", STATUS_PENDING),
            user_id=doc["user_id"],
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    def to_json(self):
        return {
            "_id": str(self.id) if self.id is not None else None,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "user": str(self.user_id),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
