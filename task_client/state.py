"""View-state machine for the task client.

``AppState`` is the root container: it owns the ``Session``, the API client
and the current view (login, register or dashboard). ``Dashboard`` holds the
authoritative task list plus the search/filter/modal state a UI binds to.
"""

from __future__ import annotations

import logging
from enum import Enum

import requests

from .api import ApiError, TaskApi
from .config import ClientConfig
from .filters import STATUS_ALL, filter_tasks
from .forms import LoginForm, RegisterForm, TaskForm
from .session import Session, SessionStorage

logger = logging.getLogger(__name__)


class View(str, Enum):
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"


class Dashboard:
    def __init__(self, api):
        self.api = api
        self.tasks = []
        self.search_query = ""
        self.filter_status = STATUS_ALL
        self.show_task_modal = False
        self.editing_task = None
        self.task_form = TaskForm()
        self.loading = False
        self.errors = {}

    @property
    def filtered_tasks(self):
        return filter_tasks(self.tasks, self.search_query, self.filter_status)

    def load_tasks(self):
        try:
            self.tasks = self.api.get_tasks()
        except ApiError as exc:
            logger.error("Failed to load tasks: %s", exc.message)
            self.errors = {"general": exc.message}
        return self.tasks

    def open_new_task_modal(self):
        self.editing_task = None
        self.task_form = TaskForm()
        self.errors = {}
        self.show_task_modal = True

    def edit_task(self, task):
        self.editing_task = task
        self.task_form = TaskForm.from_task(task)
        self.errors = {}
        self.show_task_modal = True

    def close_modal(self):
        self.show_task_modal = False
        self.editing_task = None
        self.task_form = TaskForm()
        self.errors = {}

    def save_task(self):
        """Create or update from the modal form; False leaves the modal open."""
        errors = self.task_form.validate()
        if errors:
            self.errors = errors
            return False

        editing = self.editing_task
        self.loading = True
        try:
            if editing is None:
                created = self.api.create_task(self.task_form.to_payload())
                self.tasks = [created, *self.tasks]
            else:
                updated = self.api.update_task(editing["_id"], self.task_form.to_payload())
                self.tasks = [updated if t["_id"] == editing["_id"] else t for t in self.tasks]
        except ApiError as exc:
            fallback = "Failed to create task" if editing is None else "Failed to update task"
            self.errors = {"general": exc.message or fallback}
            return False
        finally:
            self.loading = False

        self.close_modal()
        return True

    def delete_task(self, task_id, confirm=None):
        if confirm is not None and not confirm():
            return False

        self.loading = True
        try:
            self.api.delete_task(task_id)
        except ApiError as exc:
            logger.error("Failed to delete task %s: %s", task_id, exc.message)
            self.errors = {"general": exc.message}
            return False
        finally:
            self.loading = False

        self.tasks = [t for t in self.tasks if t["_id"] != task_id]
        return True


class AppState:
    def __init__(
        self,
        api_url: str,
        storage: SessionStorage,
        http: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.storage = storage
        # The API reads the token from this object on every call, so it is
        # only ever mutated in place.
        self.session = Session()
        self.api = TaskApi(api_url, self.session, on_unauthorized=self.handle_unauthorized, http=http, timeout=timeout)
        self.view = View.LOGIN
        self.login_form = LoginForm()
        self.register_form = RegisterForm()
        self.errors = {}
        self.loading = False
        self.dashboard: Dashboard | None = None

    @classmethod
    def from_config(cls, config=None):
        config = config or ClientConfig.from_env()
        return cls(config.api_url, SessionStorage(config.session_file), timeout=config.timeout)

    @property
    def user(self):
        return self.session.user

    def start(self):
        """Restore a saved session; an expired token is only noticed on the first request."""
        saved = self.storage.load()
        if saved.is_authenticated:
            self.session.token = saved.token
            self.session.user = saved.user
            self._enter_dashboard()
        return self.view

    def show_login(self):
        if self.view is View.REGISTER:
            self.view = View.LOGIN
            self.errors = {}

    def show_register(self):
        if self.view is View.LOGIN:
            self.view = View.REGISTER
            self.errors = {}

    def login(self):
        errors = self.login_form.validate()
        if errors:
            self.errors = errors
            return False

        self.loading = True
        try:
            data = self.api.login(self.login_form.email, self.login_form.password)
        except ApiError as exc:
            self.errors = {"general": exc.message or "Login failed"}
            return False
        finally:
            self.loading = False

        self.login_form = LoginForm()
        self._establish(data)
        return True

    def register(self):
        errors = self.register_form.validate()
        if errors:
            self.errors = errors
            return False

        form = self.register_form
        self.loading = True
        try:
            data = self.api.register(form.name, form.email, form.password)
        except ApiError as exc:
            self.errors = {"general": exc.message or "Registration failed"}
            return False
        finally:
            self.loading = False

        self.register_form = RegisterForm()
        self._establish(data)
        return True

    def refresh_profile(self):
        try:
            data = self.api.get_profile()
        except ApiError as exc:
            logger.warning("Could not refresh profile: %s", exc.message)
            return None
        self.session.user = data["user"]
        self.storage.save(self.session)
        return self.session.user

    def logout(self):
        self._teardown()

    def handle_unauthorized(self):
        logger.info("Session rejected by the server; signing out")
        self._teardown()

    def _establish(self, data):
        self.session.token = data["token"]
        self.session.user = data["user"]
        self.storage.save(self.session)
        self.errors = {}
        self._enter_dashboard()

    def _enter_dashboard(self):
        self.view = View.DASHBOARD
        self.dashboard = Dashboard(self.api)
        self.dashboard.load_tasks()

    def _teardown(self):
        self.storage.clear()
        self.session.clear()
        self.dashboard = None
        self.view = View.LOGIN
