from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import current_user, jwt_required
from pymongo.errors import DuplicateKeyError

from task_service.errors import AuthError, ConflictError, ValidationError
from task_service.models.user_model import User, normalize_email
from task_service.utils.auth import issue_token
from task_service.utils.db import get_db
from task_service.utils.validation import MIN_PASSWORD_LENGTH, clean_text, get_payload, is_valid_email


auth_bp = Blueprint("auth", __name__)

# Same message for unknown email and wrong password so accounts can't be enumerated.
INVALID_CREDENTIALS = "Invalid email or password"


def _auth_payload(user):
    return {"token": issue_token(user), "user": user.public_profile()}


@auth_bp.post("/register")
def register():
    payload = get_payload()
    name = clean_text(payload, "name")
    email = normalize_email(clean_text(payload, "email"))
    password = payload.get("password") or ""

    if not name or not email or not password:
        raise ValidationError("Name, email and password are required")
    if not is_valid_email(email):
        raise ValidationError("Email is invalid")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    users = get_db().users
    if users.find_one({"email": email}):
        raise ConflictError("User already exists with this email")

    user = User.create(name, email, password)
    try:
        user.id = users.insert_one(user.to_document()).inserted_id
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same address.
        raise ConflictError("User already exists with this email")

    current_app.logger.info("Registered user %s", user.id)
    return jsonify(_auth_payload(user)), 201


@auth_bp.post("/login")
def login():
    payload = get_payload()
    email = normalize_email(clean_text(payload, "email"))
    password = payload.get("password") or ""
    if not email or not password:
        raise ValidationError("Email and password are required")

    doc = get_db().users.find_one({"email": email})
    user = User.from_document(doc) if doc else None
    if user is None or not isinstance(password, str) or not user.check_password(password):
        raise AuthError(INVALID_CREDENTIALS)

    return jsonify(_auth_payload(user)), 200


@auth_bp.get("/profile")
@jwt_required()
def profile():
    return jsonify(user=current_user.public_profile()), 200
