# sentinela/services/auth_service.py
from datetime import datetime, timedelta
from typing import Tuple

from flask import current_app
from flask_jwt_extended import create_access_token, get_jti

from .. import db
from ..errors import AuthenticationError, ConflictError
from ..models.user import User
from ..models.user_session import UserSession


def get_user_by_email(email: str):
    return User.query.filter_by(email=email).first()


def register_user(email: str, password: str, display_name: str) -> User:
    if get_user_by_email(email):
        raise ConflictError("email already in use")

    # display name is collected up front, so there is no onboarding step left
    user = User(
        email=email,
        display_name=display_name,
        auth_provider="local",
        is_onboarded=True,
    )
    user.set_password(password)
    db.session.add(user)
    db.session.flush()
    return user


def authenticate_user(email: str, password: str) -> User:
    user = get_user_by_email(email)
    if not user or not user.password_hash:
        current_app.logger.info(f"[auth/login] user NOT found for '{email}'")
        raise AuthenticationError()

    if not user.check_password(password):
        current_app.logger.info(f"[auth/login] bad password for user_id={user.id}")
        raise AuthenticationError()

    return user


def open_session(user: User) -> Tuple[str, UserSession]:
    """Issue an access token and persist its session row. Caller commits."""
    purge_expired_sessions(user.id)

    token = create_access_token(identity=str(user.id))

    lifetime = current_app.config.get("JWT_ACCESS_TOKEN_EXPIRES") or timedelta(days=7)
    now = datetime.utcnow()
    session_row = UserSession(
        jti=get_jti(token),
        user_id=user.id,
        created_at=now,
        expires_at=now + lifetime,
    )
    db.session.add(session_row)
    return token, session_row


def close_session(jti: str) -> bool:
    deleted = UserSession.query.filter_by(jti=jti).delete()
    db.session.commit()
    return bool(deleted)


def is_session_active(jti: str) -> bool:
    row = UserSession.query.filter_by(jti=jti).first()
    return bool(row and row.is_active())


def purge_expired_sessions(user_id: int) -> int:
    return UserSession.query.filter(
        UserSession.user_id == user_id,
        UserSession.expires_at <= datetime.utcnow(),
    ).delete(synchronize_session=False)
