"""
Seed script that creates a demo account with starter data.

This script:
1. Registers demo@example.com (password "password") if it does not exist
2. Adds a handful of income and expense categories for that user
3. Adds a few sample transactions against those categories

Running it twice leaves the database unchanged the second time.
Usage: python -m simple_budget.seed_data
"""

import datetime as dt
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from . import auth
from .db import models, session
from .schemas import RegisterRequest

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password"

DEFAULT_CATEGORIES = [
    ("Groceries", "expense"),
    ("Transport", "expense"),
    ("Entertainment", "expense"),
    ("Salary", "income"),
]

SAMPLE_TRANSACTIONS = [
    ("Corner Market", Decimal("54.20"), "Weekly shop", "Groceries", 3),
    ("City Metro", Decimal("2.75"), None, "Transport", 2),
    ("Acme Corp", Decimal("2500.00"), "Monthly pay", "Salary", 1),
]


def seed(db: Session) -> models.User:
    """Create the demo user and its data unless the user already exists."""
    user = db.query(models.User).filter(models.User.email == DEMO_EMAIL).first()
    if user:
        logger.info("Demo user already exists (id=%s), nothing to do", user.id)
        return user

    user = auth.register_user(
        db, RegisterRequest(name="Demo User", email=DEMO_EMAIL, password=DEMO_PASSWORD)
    )

    categories = {}
    for name, category_type in DEFAULT_CATEGORIES:
        category = models.Category(name=name, type=category_type, user_id=user.id)
        db.add(category)
        categories[name] = category
    db.flush()

    today = dt.date.today()
    for venue, amount, comments, category_name, days_ago in SAMPLE_TRANSACTIONS:
        db.add(models.Transaction(
            venue=venue,
            amount=amount,
            comments=comments,
            category_id=categories[category_name].id,
            user_id=user.id,
            date=today - dt.timedelta(days=days_ago),
        ))
    db.commit()
    logger.info(
        "Seeded demo user id=%s with %d categories and %d transactions",
        user.id, len(DEFAULT_CATEGORIES), len(SAMPLE_TRANSACTIONS),
    )
    return user


def main():
    logging.basicConfig(level=logging.INFO)
    db = session.SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
