# sentinela/routes/achievement_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from ..services.achievement_service import list_achievements

achievements_bp = Blueprint("achievements", __name__)


@achievements_bp.route("", methods=["GET"])
@jwt_required()
def my_achievements():
    user_id = int(get_jwt_identity())
    rows = list_achievements(user_id)
    return jsonify({"achievements": [a.to_dict() for a in rows]}), 200
