import datetime as dt
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from ..db import models
from ..errors import BadRequest
from ..ownership import get_owned_or_404, is_owned_by
from ..schemas import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)

MAX_VENUE_LENGTH = 50
UPDATABLE_FIELDS = ("venue", "amount", "comments", "category_id")


def _owner_of(transaction: models.Transaction):
    return transaction.user_id


def _clean_venue(venue) -> str:
    if venue is None or not venue.strip():
        raise BadRequest("Missing 'venue' in request body")
    venue = venue.strip()
    if len(venue) > MAX_VENUE_LENGTH:
        raise BadRequest(f"'venue' must be at most {MAX_VENUE_LENGTH} characters")
    return venue


def _clean_amount(amount: Optional[Decimal]) -> Decimal:
    if amount is None:
        raise BadRequest("Missing 'amount' in request body")
    if not amount.is_finite():
        raise BadRequest("'amount' must be a number")
    return amount


def _check_category(db: Session, user_id: int, category_id: Optional[int]) -> None:
    if category_id is None:
        return
    category = db.get(models.Category, category_id)
    if not is_owned_by(category, user_id, lambda c: c.user_id):
        raise BadRequest("Unknown category_id")


def list_transactions(db: Session, user_id: int) -> List[models.Transaction]:
    return (
        db.query(models.Transaction)
        .filter(models.Transaction.user_id == user_id)
        .order_by(models.Transaction.id)
        .all()
    )


def create_transaction(db: Session, user_id: int, payload: TransactionCreate) -> models.Transaction:
    venue = _clean_venue(payload.venue)
    amount = _clean_amount(payload.amount)
    _check_category(db, user_id, payload.category_id)

    transaction = models.Transaction(
        venue=venue,
        amount=amount,
        comments=payload.comments,
        category_id=payload.category_id,
        date=payload.date or dt.date.today(),
        user_id=user_id,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info("User %s created transaction %s", user_id, transaction.id)
    return transaction


def get_transaction(db: Session, user_id: int, transaction_id: int) -> models.Transaction:
    return get_owned_or_404(
        lambda pk: db.get(models.Transaction, pk), _owner_of, transaction_id, user_id, label="Transaction"
    )


def update_transaction(db: Session, user_id: int, transaction_id: int, payload: TransactionUpdate) -> None:
    """Apply a partial update of venue, amount, comments and/or category_id."""
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise BadRequest(
            "Request body must contain one of " + ", ".join(f"'{f}'" for f in UPDATABLE_FIELDS)
        )

    changes = {}
    if "venue" in fields:
        changes["venue"] = _clean_venue(fields["venue"])
    if "amount" in fields:
        changes["amount"] = _clean_amount(fields["amount"])
    if "comments" in fields:
        changes["comments"] = fields["comments"]
    if "category_id" in fields:
        _check_category(db, user_id, fields["category_id"])
        changes["category_id"] = fields["category_id"]

    transaction = get_transaction(db, user_id, transaction_id)
    for key, value in changes.items():
        setattr(transaction, key, value)
    db.commit()


def delete_transaction(db: Session, user_id: int, transaction_id: int) -> None:
    transaction = get_transaction(db, user_id, transaction_id)
    db.delete(transaction)
    db.commit()
    logger.info("User %s deleted transaction %s", user_id, transaction_id)
