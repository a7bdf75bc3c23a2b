# sentinela/models/monthly_stats.py
from datetime import datetime
from decimal import Decimal
from .. import db
from ..utils import money_str

DEFAULT_GOAL_AMOUNT = Decimal("6000.00")


class MonthlyStats(db.Model):
    """
    Materialized per-(user, month) totals. Always rebuilt from the
    user's daily entries, never patched incrementally.
    """
    __tablename__ = "monthly_stats"
    __table_args__ = (
        db.Index("monthly_stats_user_month_idx", "user_id", "month", unique=True),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    month = db.Column(db.String(7), nullable=False)  # YYYY-MM
    total_rides = db.Column(db.Integer, nullable=False, default=0)
    total_revenue = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    total_fuel_cost = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    goal_amount = db.Column(db.Numeric(10, 2), nullable=False, default=DEFAULT_GOAL_AMOUNT)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = db.relationship("User", backref=db.backref("monthly_stats", lazy="dynamic"))

    def goal_percentage(self) -> Decimal:
        goal = Decimal(self.goal_amount or DEFAULT_GOAL_AMOUNT)
        if goal <= 0:
            return Decimal("0")
        return Decimal(self.total_revenue or 0) * 100 / goal

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "month": self.month,
            "total_rides": self.total_rides or 0,
            "total_revenue": money_str(self.total_revenue),
            "total_fuel_cost": money_str(self.total_fuel_cost),
            "goal_amount": money_str(self.goal_amount),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
