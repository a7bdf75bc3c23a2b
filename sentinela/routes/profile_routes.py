# sentinela/routes/profile_routes.py
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from .. import db
from ..errors import ValidationError
from ..models.user import User
from ..utils import is_http_url, pick

profile_bp = Blueprint("profile", __name__)

@profile_bp.route("", methods=["POST"])
@jwt_required()
def update_profile():
    user_id = int(get_jwt_identity())
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({"message": "user not found"}), 404

    data = request.get_json(silent=True) or {}

    display_name = pick(data, "display_name", "displayName")
    profile_image_url = pick(data, "profile_image_url", "profileImageUrl")

    errors = {}
    if not isinstance(display_name, str) or not display_name.strip():
        errors["display_name"] = "display name is required"
    if profile_image_url is not None and (
        not isinstance(profile_image_url, str) or not is_http_url(profile_image_url)
    ):
        errors["profile_image_url"] = "profile image url must be an http(s) URL"
    if errors:
        raise ValidationError(errors)

    user.display_name = display_name.strip()
    # absent image keeps the current one
    if profile_image_url:
        user.profile_image_url = profile_image_url

    # mark onboarding complete
    user.is_onboarded = True

    db.session.commit()

    return jsonify({"user": user.to_dict()}), 200
