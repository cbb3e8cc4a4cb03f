# expense_backend/expenses.py

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required

from .auth import current_identity, is_elevated_request
from .errors import json_body

expenses_bp = Blueprint("expenses", __name__)


def _workflow():
    return current_app.extensions["expense_workflow"]


@expenses_bp.route("/expense", methods=["POST"])
@jwt_required()
def add_expense():
    data = json_body()
    expense = _workflow().submit(current_identity(), data.get("amount"), data.get("description"))
    return jsonify({"message": "Expense Added ✔", "data": expense.to_dict()})


# Manual insert without AI category (for API clients like Hoppscotch)
@expenses_bp.route("/add-expense", methods=["POST"])
@jwt_required()
def add_expense_manual():
    data = json_body()
    identity = current_identity()
    user_id = data.get("user_id")
    expense = _workflow().submit_manual(
        identity,
        data.get("amount"),
        data.get("description"),
        category=data.get("category"),
        user_id=user_id,
        elevated=bool(user_id) and user_id != identity.id and is_elevated_request(),
    )
    return jsonify({"success": True, "data": expense.to_dict()})


@expenses_bp.route("/expenses", methods=["GET"])
@jwt_required()
def list_expenses():
    expenses = _workflow().list(current_identity())
    return jsonify([e.to_dict() for e in expenses])


@expenses_bp.route("/expense/<expense_id>", methods=["DELETE"])
@jwt_required()
def delete_expense(expense_id):
    _workflow().remove(current_identity(), expense_id)
    return jsonify({"message": "Deleted ✔"})
