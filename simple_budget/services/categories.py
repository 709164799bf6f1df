import logging
from typing import List

from sqlalchemy.orm import Session

from ..db import models
from ..errors import BadRequest
from ..ownership import get_owned_or_404
from ..schemas import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50
DEFAULT_TYPE = "expense"


def _owner_of(category: models.Category):
    return category.user_id


def _clean_name(name) -> str:
    if name is None or not name.strip():
        raise BadRequest("Missing 'name' in request body")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise BadRequest(f"'name' must be at most {MAX_NAME_LENGTH} characters")
    return name


def _clean_type(category_type) -> str:
    if category_type is None:
        raise BadRequest("'type' must be one of: " + ", ".join(models.CATEGORY_TYPES))
    category_type = category_type.strip().lower()
    if category_type not in models.CATEGORY_TYPES:
        raise BadRequest("'type' must be one of: " + ", ".join(models.CATEGORY_TYPES))
    return category_type


def list_categories(db: Session, user_id: int) -> List[models.Category]:
    return (
        db.query(models.Category)
        .filter(models.Category.user_id == user_id)
        .order_by(models.Category.id)
        .all()
    )


def create_category(db: Session, user_id: int, payload: CategoryCreate) -> models.Category:
    name = _clean_name(payload.name)
    category_type = _clean_type(payload.type) if payload.type is not None else DEFAULT_TYPE

    category = models.Category(name=name, type=category_type, user_id=user_id)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("User %s created category %s", user_id, category.id)
    return category


def get_category(db: Session, user_id: int, category_id: int) -> models.Category:
    return get_owned_or_404(
        lambda pk: db.get(models.Category, pk), _owner_of, category_id, user_id, label="Category"
    )


def update_category(db: Session, user_id: int, category_id: int, payload: CategoryUpdate) -> None:
    """Apply a partial update; only fields present in the request body change."""
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise BadRequest("Request body must contain either 'name' or 'type'")

    changes = {}
    if "name" in fields:
        changes["name"] = _clean_name(fields["name"])
    if "type" in fields:
        changes["type"] = _clean_type(fields["type"])

    category = get_category(db, user_id, category_id)
    for key, value in changes.items():
        setattr(category, key, value)
    db.commit()


def delete_category(db: Session, user_id: int, category_id: int) -> None:
    category = get_category(db, user_id, category_id)
    db.delete(category)
    db.commit()
    logger.info("User %s deleted category %s", user_id, category_id)
