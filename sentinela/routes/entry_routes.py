# sentinela/routes/entry_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from ..errors import ValidationError
from ..services.entry_service import (
    get_daily_entry,
    list_daily_entries,
    submit_daily_entry,
)
from ..utils import (
    parse_iso_date,
    parse_money,
    parse_non_negative_int,
    pick,
    utc_today,
)

entries_bp = Blueprint("daily_entries", __name__)


def _parse_entry_payload(data: dict) -> dict:
    """
    Body:
    {
      "rides": 12,
      "revenue": "250.50",      # number or numeric string
      "fuel_cost": "60.00",     # "fuelCost" also accepted
      "date": "2025-03-14"      # optional, defaults to today (UTC)
    }
    """
    errors = {}

    raw_date = data.get("date")
    if raw_date is None:
        entry_date = utc_today()
    else:
        entry_date, err = parse_iso_date(raw_date)
        if err:
            errors["date"] = err

    if data.get("rides") is None:
        rides, err = None, "rides is required"
    else:
        rides, err = parse_non_negative_int(data.get("rides"), "rides")
    if err:
        errors["rides"] = err

    revenue, err = parse_money(data.get("revenue"), "revenue")
    if err:
        errors["revenue"] = err

    fuel_cost, err = parse_money(pick(data, "fuel_cost", "fuelCost"), "fuel_cost")
    if err:
        errors["fuel_cost"] = err

    if errors:
        raise ValidationError(errors)

    return {
        "entry_date": entry_date,
        "rides": rides,
        "revenue": revenue,
        "fuel_cost": fuel_cost,
    }


# ------------------------------
# POST /api/daily-entries
# ------------------------------
@entries_bp.route("", methods=["POST"])
@jwt_required()
def submit_entry():
    user_id = int(get_jwt_identity())
    data = request.get_json(silent=True) or {}

    values = _parse_entry_payload(data)
    result = submit_daily_entry(user_id, **values)

    return jsonify(
        {
            "entry": result.entry.to_dict(),
            "new_achievements": [a.to_dict() for a in result.new_achievements],
        }
    ), 200


# ------------------------------
# GET /api/daily-entries
# ------------------------------
@entries_bp.route("", methods=["GET"])
@jwt_required()
def list_entries():
    user_id = int(get_jwt_identity())
    rows = list_daily_entries(user_id)
    return jsonify({"entries": [e.to_dict() for e in rows]}), 200


# ------------------------------
# GET /api/daily-entries/<YYYY-MM-DD>
# ------------------------------
@entries_bp.route("/<date_str>", methods=["GET"])
@jwt_required()
def get_entry(date_str):
    user_id = int(get_jwt_identity())

    entry_date, err = parse_iso_date(date_str)
    if err:
        raise ValidationError({"date": err})

    entry = get_daily_entry(user_id, entry_date)
    # no entry for the day is a normal answer, not a 404
    return jsonify({"entry": entry.to_dict() if entry else None}), 200
