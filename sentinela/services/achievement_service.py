# sentinela/services/achievement_service.py
from collections import namedtuple
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from .. import db
from ..models.achievement import (
    Achievement,
    ACHIEVEMENT_TYPES,
    RIDES_100,
    DAYS_30,
    GOAL_6K,
)
from ..models.monthly_stats import MonthlyStats, DEFAULT_GOAL_AMOUNT
from .stats_service import entries_for_month, get_or_create_monthly_stats

RIDES_THRESHOLD = 100
DAYS_THRESHOLD = 30

AwardResult = namedtuple("AwardResult", ["achievement", "created"])

# (type, predicate(stats, entry_count)). Add a badge by adding a row.
AchievementRule = Tuple[str, Callable[[MonthlyStats, int], bool]]

ACHIEVEMENT_RULES: List[AchievementRule] = [
    (RIDES_100, lambda stats, entry_count: int(stats.total_rides or 0) >= RIDES_THRESHOLD),
    (DAYS_30, lambda stats, entry_count: entry_count >= DAYS_THRESHOLD),
    (GOAL_6K, lambda stats, entry_count: Decimal(stats.total_revenue or 0) >= DEFAULT_GOAL_AMOUNT),
]


def get_achievement(user_id: int, achievement_type: str) -> Optional[Achievement]:
    return Achievement.query.filter_by(user_id=user_id, type=achievement_type).first()


def award_achievement(user_id: int, achievement_type: str) -> AwardResult:
    """
    Insert-if-absent. Returns AwardResult(achievement, created=True) for a
    fresh badge and AwardResult(existing, created=False) when the user
    already holds it; the second case is not an error.
    """
    if achievement_type not in ACHIEVEMENT_TYPES:
        raise ValueError(f"unknown achievement type: {achievement_type!r}")

    existing = get_achievement(user_id, achievement_type)
    if existing:
        return AwardResult(existing, False)

    achievement = Achievement(
        user_id=user_id,
        type=achievement_type,
        earned_at=datetime.utcnow(),
    )
    try:
        # savepoint: a lost race only undoes this insert
        with db.session.begin_nested():
            db.session.add(achievement)
    except IntegrityError:
        return AwardResult(get_achievement(user_id, achievement_type), False)
    return AwardResult(achievement, True)


def evaluate_rules(stats: MonthlyStats, entry_count: int) -> List[str]:
    return [a_type for a_type, predicate in ACHIEVEMENT_RULES if predicate(stats, entry_count)]


def check_and_award_achievements(
    user_id: int, month: str, stats: Optional[MonthlyStats] = None
) -> List[Achievement]:
    """
    Evaluate every rule against the user's totals for ``month`` and award
    what is met. Returns only the badges created by this call. Badges are
    never taken back, even if the totals later drop.
    """
    if stats is None:
        stats = get_or_create_monthly_stats(user_id, month)
    entry_count = len(entries_for_month(user_id, month))

    newly_awarded = []
    for a_type in evaluate_rules(stats, entry_count):
        result = award_achievement(user_id, a_type)
        if result.created:
            current_app.logger.info(
                f"[achievements] user_id={user_id} earned '{a_type}' in {month}"
            )
            newly_awarded.append(result.achievement)

    return newly_awarded


def list_achievements(user_id: int) -> List[Achievement]:
    return (
        Achievement.query.filter_by(user_id=user_id)
        .order_by(Achievement.earned_at.desc(), Achievement.id.desc())
        .all()
    )


def achievement_badges(user_id: int) -> dict:
    owned = {a.type for a in Achievement.query.filter_by(user_id=user_id).all()}
    return {a_type: a_type in owned for a_type in ACHIEVEMENT_TYPES}
