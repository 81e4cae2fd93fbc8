from __future__ import annotations

import logging
from typing import Callable

import requests

from .session import Session

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed call; ``message`` is the server's text when it sent one."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_unauthorized(self):
        return self.status_code == 401


class TaskApi:
    """Thin wrapper over the task service's REST endpoints."""

    def __init__(
        self,
        base_url: str,
        session: Session,
        on_unauthorized: Callable[[], None] | None = None,
        http: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.on_unauthorized = on_unauthorized
        self.http = http or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, payload=None):
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            response = self.http.request(
                method,
                f"{self.base_url}{path}",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"Could not reach the server: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.ok:
            return data

        message = data.get("message") if isinstance(data, dict) else None
        error = ApiError(message or f"Request failed with status {response.status_code}", response.status_code)
        if error.is_unauthorized and self.on_unauthorized is not None:
            self.on_unauthorized()
        raise error

    def register(self, name, email, password):
        return self._request("POST", "/auth/register", {"name": name, "email": email, "password": password})

    def login(self, email, password):
        return self._request("POST", "/auth/login", {"email": email, "password": password})

    def get_profile(self):
        return self._request("GET", "/auth/profile")

    def get_tasks(self):
        return self._request("GET", "/tasks")

    def get_task(self, task_id):
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(self, task):
        return self._request("POST", "/tasks", task)

    def update_task(self, task_id, task):
        return self._request("PUT", f"/tasks/{task_id}", task)

    def delete_task(self, task_id):
        return self._request("DELETE", f"/tasks/{task_id}")
