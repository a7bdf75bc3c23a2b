# sentinela/models/daily_entry.py
from datetime import datetime
from decimal import Decimal
from .. import db
from ..utils import money_str

class DailyEntry(db.Model):
    __tablename__ = "daily_entries"
    __table_args__ = (
        db.UniqueConstraint("user_id", "entry_date", name="uq_daily_entries_user_date"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    entry_date = db.Column(db.Date, nullable=False)
    rides = db.Column(db.Integer, nullable=False, default=0)
    revenue = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    fuel_cost = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", backref=db.backref("daily_entries", lazy="dynamic"))

    @property
    def month(self) -> str:
        return self.entry_date.isoformat()[:7]

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.entry_date.isoformat() if self.entry_date else None,
            "rides": self.rides,
            "revenue": money_str(self.revenue),
            "fuel_cost": money_str(self.fuel_cost),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
