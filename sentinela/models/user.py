# sentinela/models/user.py
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(100))
    profile_image_url = db.Column(db.String(512))
    is_onboarded = db.Column(db.Boolean, default=False, nullable=False)
    auth_provider = db.Column(db.String(20), default="local", nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_summary_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
        }

    def to_public_dict(self):
        # what other drivers see on the ranking
        return {
            "id": self.id,
            "display_name": self.display_name,
            "profile_image_url": self.profile_image_url,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "profile_image_url": self.profile_image_url,
            "is_onboarded": self.is_onboarded,
            "auth_provider": self.auth_provider,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
