# sentinela/models/user_session.py
from datetime import datetime
from .. import db


class UserSession(db.Model):
    """
    Server-side half of a login. The access token carries the jti; the
    token is only honoured while this row exists and has not expired.
    """
    __tablename__ = "user_sessions"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), unique=True, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    user = db.relationship("User", backref=db.backref("sessions", lazy="dynamic"))

    def is_active(self, now=None) -> bool:
        return (now or datetime.utcnow()) < self.expires_at
