"""Transaction and category routes."""

from __future__ import annotations

import logging

from flask import jsonify, request

from ...extensions import get_analytics
from ...models.category import Category
from ...models.transaction import Transaction
from ..common import current_user_id, iso_or_none, not_found, validation_failure
from . import bp
from .forms import CategoryForm, TransactionFilterForm, TransactionForm

logger = logging.getLogger(__name__)


def _transaction_payload(txn: Transaction) -> dict[str, object]:
    return {
        "id": txn.id,
        "amount": float(txn.amount),
        "type": txn.type,
        "description": txn.description,
        "categoryId": txn.category_id,
        "date": iso_or_none(txn.occurred_at),
        "isFixed": txn.is_fixed,
        "tags": list(txn.tags or []),
        "satisfactionRating": txn.satisfaction_rating,
    }


def _category_payload(category: Category) -> dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "color": category.color,
        "type": category.type,
        "isDefault": category.is_default,
    }


@bp.get("/expenses")
def list_transactions():
    """List the user's transactions, newest first, with optional filters."""

    form = TransactionFilterForm.from_mapping(request.args.to_dict())
    if not form.validate():
        return validation_failure(form.errors)
    rows = get_analytics().transactions.search(user_id=current_user_id(), **form.filters())
    return jsonify([_transaction_payload(txn) for txn in rows])


@bp.post("/expenses")
def create_transaction():
    user_id = current_user_id()
    form = TransactionForm.from_mapping(request.get_json(silent=True))
    if not form.validate():
        return validation_failure(form.errors)

    txn = get_analytics().transactions.create(form.to_model(user_id), user_id=user_id)
    logger.info(
        "Transaction recorded",
        extra={"user_id": user_id, "transaction_id": txn.id, "type": txn.type},
    )
    return jsonify(_transaction_payload(txn)), 201


@bp.get("/expenses/<int:transaction_id>")
def get_transaction(transaction_id: int):
    txn = get_analytics().transactions.get_by_id(transaction_id, user_id=current_user_id())
    if txn is None:
        return not_found("transaction", transaction_id)
    return jsonify(_transaction_payload(txn))


@bp.delete("/expenses/<int:transaction_id>")
def delete_transaction(transaction_id: int):
    user_id = current_user_id()
    repo = get_analytics().transactions
    if repo.get_by_id(transaction_id, user_id=user_id) is None:
        return not_found("transaction", transaction_id)
    repo.delete(transaction_id, user_id=user_id)
    logger.info(
        "Transaction deleted", extra={"user_id": user_id, "transaction_id": transaction_id}
    )
    return jsonify({"success": True})


@bp.get("/categories")
def list_categories():
    """User categories plus the shared defaults."""

    categories = get_analytics().categories.list_for_user(user_id=current_user_id())
    return jsonify([_category_payload(category) for category in categories])


@bp.post("/categories")
def create_category():
    user_id = current_user_id()
    form = CategoryForm.from_mapping(request.get_json(silent=True))
    if not form.validate():
        return validation_failure(form.errors)
    category = get_analytics().categories.create(form.to_model(user_id))
    return jsonify(_category_payload(category)), 201


@bp.delete("/categories/<int:category_id>")
def delete_category(category_id: int):
    """Delete one of the user's own categories; shared defaults are read-only."""

    user_id = current_user_id()
    repo = get_analytics().categories
    category = repo.get_by_id(category_id)
    if category is None or category.user_id != user_id:
        return not_found("category", category_id)
    repo.delete(category_id)
    logger.info("Category deleted", extra={"user_id": user_id, "category_id": category_id})
    return jsonify({"success": True})
