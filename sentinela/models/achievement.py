# sentinela/models/achievement.py
from datetime import datetime
from .. import db

# Badge codes. champion / veteran exist as valid badges but nothing
# awards them automatically.
RIDES_100 = "rides_100"
DAYS_30 = "days_30"
GOAL_6K = "goal_6k"
CHAMPION = "champion"
VETERAN = "veteran"

ACHIEVEMENT_TYPES = (RIDES_100, DAYS_30, GOAL_6K, CHAMPION, VETERAN)


class Achievement(db.Model):
    __tablename__ = "achievements"
    __table_args__ = (
        db.UniqueConstraint("user_id", "type", name="uq_achievements_user_type"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    type = db.Column(
        db.Enum(*ACHIEVEMENT_TYPES, name="achievement_type"),
        nullable=False,
    )
    earned_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("achievements", lazy="dynamic"))

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "earned_at": self.earned_at.isoformat() if self.earned_at else None,
        }
