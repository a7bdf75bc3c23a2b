# sentinela/routes/dashboard_routes.py
from decimal import Decimal

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from .. import db
from ..errors import ValidationError
from ..models.user import User
from ..services.achievement_service import achievement_badges
from ..services.stats_service import ensure_monthly_stats, entries_for_month, month_key
from ..utils import is_month_key, money_str, utc_today

# Blueprint for dashboard-related endpoints
dashboard_bp = Blueprint("dashboard", __name__)

HUNDRED = Decimal("100")


def _progress_summary(stats) -> dict:
    revenue = Decimal(stats.total_revenue or 0)
    fuel_cost = Decimal(stats.total_fuel_cost or 0)
    goal = Decimal(stats.goal_amount or 0)

    progress = min(stats.goal_percentage(), HUNDRED)
    remaining = max(goal - revenue, Decimal("0"))
    net_profit = revenue - fuel_cost
    roi = (net_profit / fuel_cost * HUNDRED) if fuel_cost > 0 else Decimal("0")

    return {
        "progress_percentage": money_str(progress),
        "remaining_amount": money_str(remaining),
        "net_profit": money_str(net_profit),
        "roi": money_str(roi),
    }


def _dashboard_payload(user: User, month: str) -> dict:
    stats = ensure_monthly_stats(user.id, month)
    working_days = len(entries_for_month(user.id, month))

    return {
        "user": user.to_dict(),
        "month": month,
        "stats": stats.to_dict(),
        "summary": {
            **_progress_summary(stats),
            "working_days": working_days,
        },
        "badges": achievement_badges(user.id),
    }


# -------------------------
# DASHBOARD OVERVIEW (current month)
# -------------------------
@dashboard_bp.route("/overview", methods=["GET"])
@jwt_required()
def dashboard_overview():
    user_id = int(get_jwt_identity())
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({"message": "user not found"}), 404

    return jsonify(_dashboard_payload(user, month_key(utc_today()))), 200


# -------------------------
# DASHBOARD FOR A GIVEN MONTH
# -------------------------
@dashboard_bp.route("/<month>", methods=["GET"])
@jwt_required()
def dashboard_for_month(month):
    user_id = int(get_jwt_identity())
    if not is_month_key(month):
        raise ValidationError({"month": "month must be in YYYY-MM format"})

    user = db.session.get(User, user_id)
    if not user:
        return jsonify({"message": "user not found"}), 404

    return jsonify(_dashboard_payload(user, month)), 200
