from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..db import models
from ..db.session import get_db
from ..schemas import CategoryCreate, CategoryOut, CategoryUpdate
from ..services import categories as service

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return service.list_categories(db, current_user.id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    response: Response,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    category = service.create_category(db, current_user.id, payload)
    response.headers["Location"] = f"/api/categories/{category.id}"
    return category


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.get_category(db, current_user.id, category_id)


@router.patch("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.update_category(db, current_user.id, category_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{category_id}", status_code=status.HTTP_202_ACCEPTED)
def delete_category(
    category_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.delete_category(db, current_user.id, category_id)
    return Response(status_code=status.HTTP_202_ACCEPTED)
