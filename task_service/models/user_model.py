from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bson import ObjectId
from werkzeug.security import check_password_hash, generate_password_hash

from task_service.utils.db import utcnow


def normalize_email(email):
    return (email or "").strip().lower()


@dataclass
class User:
    name: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=utcnow)
    id: Optional[ObjectId] = None

    @classmethod
    def create(cls, name, email, password):
        return cls(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=generate_password_hash(password),
        )

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_document(self):
        doc = {
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc):
        return cls(
            id=doc["_id"],
            name=doc["name"],
            email=doc["email"],
            password_hash=doc["password_hash"],
            created_at=doc.get("created_at"),
        )

    def public_profile(self):
        # The password hash never leaves the service.
        return {"_id": str(self.id), "name": self.name, "email": self.email}
