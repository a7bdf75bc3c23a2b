# sentinela/routes/ranking_routes.py
from decimal import Decimal, ROUND_HALF_UP

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from ..errors import ValidationError
from ..services.stats_service import monthly_ranking
from ..utils import is_month_key

ranking_bp = Blueprint("ranking", __name__)


def _goal_status(percentage: Decimal) -> str:
    """
    Bucket used by the ranking board:
      - >= 100%  goal_reached
      - >= 50%   above_half
      - > 0%     below_half
      - else     unranked
    """
    if percentage >= 100:
        return "goal_reached"
    if percentage >= 50:
        return "above_half"
    if percentage > 0:
        return "below_half"
    return "unranked"


@ranking_bp.route("/<month>", methods=["GET"])
@jwt_required()
def month_ranking(month):
    """
    Returns:
    {
      "month": "2025-03",
      "ranking": [
        {
          "position": 1,
          "stats": { ... MonthlyStats.to_dict() ... },
          "user": { "id": 7, "display_name": "Ana", "profile_image_url": null },
          "goal_percentage": 117,
          "status": "goal_reached"
        },
        ...
      ]
    }
    """
    if not is_month_key(month):
        raise ValidationError({"month": "month must be in YYYY-MM format"})

    ranking = []
    for position, (stats, user) in enumerate(monthly_ranking(month), start=1):
        percentage = stats.goal_percentage()
        ranking.append(
            {
                "position": position,
                "stats": stats.to_dict(),
                "user": user.to_public_dict(),
                "goal_percentage": int(percentage.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
                "status": _goal_status(percentage),
            }
        )

    return jsonify({"month": month, "ranking": ranking}), 200
