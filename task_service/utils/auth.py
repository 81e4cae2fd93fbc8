"""Bearer-token plumbing built on flask-jwt-extended.

Tokens carry the user id as their identity. Every way a token can fail
(missing, malformed, bad signature, expired, owner deleted) is answered
with the same 401 ``{"message": ...}`` shape that ``AuthError`` produces.
"""

from flask_jwt_extended import JWTManager, create_access_token

from task_service.errors import AuthError, error_response
from task_service.models.user_model import User
from task_service.utils.db import get_db, to_object_id

jwt = JWTManager()


def init_app(app):
    jwt.init_app(app)


def issue_token(user: User) -> str:
    return create_access_token(identity=str(user.id))


@jwt.user_lookup_loader
def load_user(_jwt_header, jwt_data):
    user_id = to_object_id(jwt_data.get("sub"))
    if user_id is None:
        return None
    doc = get_db().users.find_one({"_id": user_id})
    return User.from_document(doc) if doc else None


@jwt.unauthorized_loader
def missing_token(reason):
    return error_response(AuthError("No token, authorization denied"))


@jwt.invalid_token_loader
def invalid_token(reason):
    return error_response(AuthError("Token is not valid"))


@jwt.expired_token_loader
def expired_token(_jwt_header, _jwt_data):
    return error_response(AuthError("Token has expired"))


@jwt.user_lookup_error_loader
def unknown_user(_jwt_header, _jwt_data):
    return error_response(AuthError("Token is not valid"))
