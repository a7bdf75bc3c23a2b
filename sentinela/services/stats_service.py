# sentinela/services/stats_service.py
import calendar
from datetime import date
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError

from .. import db
from ..models.daily_entry import DailyEntry
from ..models.monthly_stats import MonthlyStats, DEFAULT_GOAL_AMOUNT
from ..models.user import User
from ..utils import is_month_key


def month_key(d: date) -> str:
    return d.isoformat()[:7]


def month_bounds(month: str) -> Tuple[date, date]:
    """[first day of month, last day of month], both inclusive"""
    if not is_month_key(month):
        raise ValueError(f"invalid month key: {month!r}")
    year, mon = int(month[:4]), int(month[5:7])
    start = date(year, mon, 1)
    # no "first of next month" bound, it does not exist for 9999-12
    end = date(year, mon, calendar.monthrange(year, mon)[1])
    return start, end


def entries_for_month(user_id: int, month: str) -> List[DailyEntry]:
    start, end = month_bounds(month)
    return (
        DailyEntry.query.filter(
            DailyEntry.user_id == user_id,
            DailyEntry.entry_date >= start,
            DailyEntry.entry_date <= end,
        )
        .order_by(DailyEntry.entry_date.asc())
        .all()
    )


def get_monthly_stats(user_id: int, month: str):
    return MonthlyStats.query.filter_by(user_id=user_id, month=month).first()


def get_or_create_monthly_stats(user_id: int, month: str) -> MonthlyStats:
    """
    Returns the stored row for (user, month), adding a zeroed one to the
    session if there is none yet. The caller owns the commit.
    """
    stats = get_monthly_stats(user_id, month)
    if stats:
        return stats

    stats = MonthlyStats(
        user_id=user_id,
        month=month,
        total_rides=0,
        total_revenue=Decimal("0.00"),
        total_fuel_cost=Decimal("0.00"),
        goal_amount=DEFAULT_GOAL_AMOUNT,
    )
    db.session.add(stats)
    db.session.flush()
    return stats


def ensure_monthly_stats(user_id: int, month: str) -> MonthlyStats:
    """Read path: get_or_create plus commit. Safe to call repeatedly."""
    try:
        stats = get_or_create_monthly_stats(user_id, month)
        db.session.commit()
        return stats
    except IntegrityError:
        # another request created the row first
        db.session.rollback()
        return get_monthly_stats(user_id, month)


def recompute_monthly_stats(user_id: int, month: str) -> MonthlyStats:
    """
    Re-sum every entry of ``user_id`` in ``month`` and overwrite the
    stored totals. Running it twice without an entry change stores the
    same values.
    """
    entries = entries_for_month(user_id, month)

    total_rides = sum(int(e.rides or 0) for e in entries)
    total_revenue = sum((Decimal(e.revenue or 0) for e in entries), Decimal("0.00"))
    total_fuel_cost = sum((Decimal(e.fuel_cost or 0) for e in entries), Decimal("0.00"))

    stats = get_or_create_monthly_stats(user_id, month)
    stats.total_rides = total_rides
    stats.total_revenue = total_revenue
    stats.total_fuel_cost = total_fuel_cost
    db.session.flush()
    return stats


def monthly_ranking(month: str):
    """
    (stats, user) pairs for everyone with a stats row in ``month``,
    highest revenue first. Equal revenue falls back to user id.

    A stats row created by merely viewing the month does not put a
    driver on the board; at least one entry in the month is required.
    """
    start, end = month_bounds(month)
    has_entries = exists().where(
        DailyEntry.user_id == MonthlyStats.user_id,
        DailyEntry.entry_date >= start,
        DailyEntry.entry_date <= end,
    )

    return (
        db.session.query(MonthlyStats, User)
        .join(User, MonthlyStats.user_id == User.id)
        .filter(MonthlyStats.month == month, has_entries)
        .order_by(MonthlyStats.total_revenue.desc(), MonthlyStats.user_id.asc())
        .all()
    )
