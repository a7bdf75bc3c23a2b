"""Model package exports."""

from .user import User  # noqa: F401
from .user_session import UserSession  # noqa: F401
from .daily_entry import DailyEntry  # noqa: F401
from .monthly_stats import MonthlyStats  # noqa: F401
from .achievement import Achievement  # noqa: F401

__all__ = [
    "User",
    "UserSession",
    "DailyEntry",
    "MonthlyStats",
    "Achievement",
]
