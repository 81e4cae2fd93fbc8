import re

from flask import request
from werkzeug.exceptions import BadRequest

from task_service.errors import ValidationError

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6


def get_payload():
    """Return the JSON body as a dict; an empty body counts as ``{}``."""
    if not request.get_data(cache=True):
        return {}
    try:
        payload = request.get_json(force=True)
    except BadRequest:
        raise ValidationError("Request body is not valid JSON")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def clean_text(payload, name):
    """Return the trimmed string under ``name``, or "" when it is absent or falsy."""
    value = payload.get(name)
    if not value:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{name.capitalize()} must be a string")
    return value.strip()


def is_valid_email(email):
    return bool(EMAIL_RE.fullmatch(email))
