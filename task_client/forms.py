from __future__ import annotations

import re
from dataclasses import asdict, dataclass

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
TASK_STATUSES = ("pending", "completed")


def _check_email(email, errors):
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "Email is invalid"


def _check_password(password, errors):
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"


@dataclass
class LoginForm:
    email: str = ""
    password: str = ""

    def validate(self):
        errors = {}
        _check_email(self.email, errors)
        _check_password(self.password, errors)
        return errors


@dataclass
class RegisterForm:
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    def validate(self):
        errors = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        _check_email(self.email, errors)
        _check_password(self.password, errors)
        if self.password != self.confirm_password:
            errors["confirm_password"] = "Passwords do not match"
        return errors


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    status: str = "pending"

    @classmethod
    def from_task(cls, task):
        return cls(
            title=task.get("title", ""),
            description=task.get("description", ""),
            status=task.get("status", "pending"),
        )

    def validate(self):
        errors = {}
        if not self.title.strip():
            errors["title"] = "Title is required"
        if not self.description.strip():
            errors["description"] = "Description is required"
        if self.status not in TASK_STATUSES:
            errors["status"] = "Status must be pending or completed"
        return errors

    def to_payload(self):
        return asdict(self)
