# sentinela/services/entry_service.py
from collections import namedtuple
from datetime import date
from decimal import Decimal
from typing import List, Optional

from .. import db
from ..errors import NotFoundError
from ..models.daily_entry import DailyEntry
from ..models.user import User
from .stats_service import recompute_monthly_stats
from .achievement_service import check_and_award_achievements

SubmitResult = namedtuple("SubmitResult", ["entry", "stats", "new_achievements"])


def get_daily_entry(user_id: int, entry_date: date) -> Optional[DailyEntry]:
    return DailyEntry.query.filter_by(user_id=user_id, entry_date=entry_date).first()


def list_daily_entries(user_id: int) -> List[DailyEntry]:
    return (
        DailyEntry.query.filter_by(user_id=user_id)
        .order_by(DailyEntry.entry_date.desc())
        .all()
    )


def _lock_user(user_id: int) -> User:
    # Serializes concurrent submissions of one driver: the row lock is
    # held until commit, across upsert, recompute and badge check.
    # SQLite ignores FOR UPDATE but already serializes writers.
    user = (
        db.session.query(User)
        .filter(User.id == user_id)
        .with_for_update()
        .one_or_none()
    )
    if user is None:
        # token outlived its account
        raise NotFoundError("user not found")
    return user


def submit_daily_entry(
    user_id: int,
    entry_date: date,
    rides: int,
    revenue: Decimal,
    fuel_cost: Decimal,
) -> SubmitResult:
    """
    Create or fully replace the (user, date) entry, then rebuild that
    month's stats and re-check badges, all in one transaction. Any
    failure rolls the whole thing back.

    Values are expected to be validated already (see routes).
    """
    try:
        _lock_user(user_id)

        entry = get_daily_entry(user_id, entry_date)
        if entry is None:
            entry = DailyEntry(user_id=user_id, entry_date=entry_date)
            db.session.add(entry)

        entry.rides = rides
        entry.revenue = revenue
        entry.fuel_cost = fuel_cost
        db.session.flush()

        month = entry.month
        stats = recompute_monthly_stats(user_id, month)
        new_achievements = check_and_award_achievements(user_id, month, stats=stats)

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    return SubmitResult(entry, stats, new_achievements)
