"""Client session and its on-disk store.

``Session`` is the single object the app state passes around; the storage
file plays the part of browser local storage and is only read at startup
and written on login/logout.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass
class Session:
    token: str | None = None
    user: dict | None = None

    @property
    def is_authenticated(self):
        return bool(self.token and self.user)

    def clear(self):
        self.token = None
        self.user = None


class SessionStorage:
    def __init__(self, path):
        self.path = Path(path)

    def load(self):
        if not self.path.exists():
            return Session()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return Session()
        if not isinstance(data, dict):
            return Session()
        token, user = data.get(TOKEN_KEY), data.get(USER_KEY)
        if not token or not isinstance(user, dict):
            return Session()
        return Session(token=token, user=user)

    def save(self, session):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {TOKEN_KEY: session.token, USER_KEY: session.user}
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self):
        self.path.unlink(missing_ok=True)
