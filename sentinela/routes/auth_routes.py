# sentinela/routes/auth_routes.py

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import (
    get_jwt,
    get_jwt_identity,
    jwt_required,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from .. import db
from ..errors import ValidationError
from ..models.user import User
from ..services.auth_service import (
    authenticate_user,
    close_session,
    open_session,
    register_user,
)
from ..utils import is_email, pick

auth_bp = Blueprint("auth", __name__)

PASSWORD_MIN_LENGTH = 6
DISPLAY_NAME_MIN_LENGTH = 2


def _session_response(message, user, token, status):
    resp = jsonify({"message": message, "token": token, "user": user.to_summary_dict()})
    set_access_cookies(resp, token)
    return resp, status


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""  # do NOT strip passwords
    display_name = (pick(data, "display_name", "displayName", default="") or "").strip()

    errors = {}
    if not is_email(email):
        errors["email"] = "a valid email is required"
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        errors["password"] = f"password must be at least {PASSWORD_MIN_LENGTH} characters"
    if len(display_name) < DISPLAY_NAME_MIN_LENGTH:
        errors["display_name"] = f"display name must be at least {DISPLAY_NAME_MIN_LENGTH} characters"
    if errors:
        raise ValidationError(errors)

    # ConflictError (email taken) propagates to the app handler -> 400
    user = register_user(email, password, display_name)
    token, _ = open_session(user)
    db.session.commit()

    current_app.logger.info(f"[auth/register] new user_id={user.id}")
    return _session_response("user created", user, token, 201)


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""  # do NOT strip passwords

    errors = {}
    if not email:
        errors["email"] = "email is required"
    if not password:
        errors["password"] = "password is required"
    if errors:
        raise ValidationError(errors)

    # AuthenticationError propagates to the app handler -> 401
    user = authenticate_user(email, password)
    token, _ = open_session(user)
    db.session.commit()

    return _session_response("logged in", user, token, 200)


@auth_bp.route("/logout", methods=["POST"])
def logout():
    # succeeds with or without a live session
    try:
        verify_jwt_in_request(optional=True)
        claims = get_jwt()
    except (JWTExtendedException, PyJWTError):
        claims = {}

    if claims:
        close_session(claims["jti"])

    resp = jsonify({"message": "logged out"})
    unset_jwt_cookies(resp)
    return resp, 200


@auth_bp.route("/user", methods=["GET"])
@jwt_required()
def current_user():
    user_id = int(get_jwt_identity())
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({"message": "user not found"}), 404
    return jsonify({"user": user.to_dict()}), 200
