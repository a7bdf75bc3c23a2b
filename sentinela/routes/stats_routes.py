# sentinela/routes/stats_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from ..errors import ValidationError
from ..services.stats_service import ensure_monthly_stats
from ..utils import is_month_key

stats_bp = Blueprint("monthly_stats", __name__)


@stats_bp.route("/<month>", methods=["GET"])
@jwt_required()
def get_month_stats(month):
    """
    Stats for the current user in ``month`` (YYYY-MM). A month with no
    entries yet gets a zeroed record, created on first read.
    """
    user_id = int(get_jwt_identity())
    if not is_month_key(month):
        raise ValidationError({"month": "month must be in YYYY-MM format"})

    stats = ensure_monthly_stats(user_id, month)
    return jsonify({"stats": stats.to_dict()}), 200
