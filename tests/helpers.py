from urllib.parse import urlsplit

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

API_ROOT = "http://testserver/api"


def register(client, name="Alice", email="alice@example.com", password="secret123"):
    return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def create_task(client, token, title="Buy milk", description="Two litres", **extra):
    return client.post("/api/tasks", json={"title": title, "description": description, **extra}, headers=bearer(token))


class FlaskTestAdapter(BaseAdapter):
    """Route ``requests`` calls into a Flask test client instead of the network."""

    def __init__(self, flask_client):
        super().__init__()
        self.flask_client = flask_client
        self.calls = []

    def send(self, request, **kwargs):
        parsed = urlsplit(request.url)
        path = parsed.path + (f"?{parsed.query}" if parsed.query else "")
        headers = {k: v for k, v in request.headers.items() if k.lower() not in ("content-length", "host")}
        self.calls.append((request.method, path))

        result = self.flask_client.open(path, method=request.method, headers=headers, data=request.body)

        response = requests.Response()
        response.status_code = result.status_code
        response._content = result.get_data()
        response.headers = CaseInsensitiveDict(dict(result.headers))
        response.url = request.url
        response.request = request
        response.encoding = "utf-8"
        return response

    def close(self):
        pass
