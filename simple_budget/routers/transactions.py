from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..db import models
from ..db.session import get_db
from ..schemas import TransactionCreate, TransactionOut, TransactionUpdate
from ..services import transactions as service

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionOut])
def list_transactions(current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return service.list_transactions(db, current_user.id)


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    response: Response,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    transaction = service.create_transaction(db, current_user.id, payload)
    response.headers["Location"] = f"/api/transactions/{transaction.id}"
    return transaction


@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(
    transaction_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.get_transaction(db, current_user.id, transaction_id)


@router.patch("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.update_transaction(db, current_user.id, transaction_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{transaction_id}", status_code=status.HTTP_202_ACCEPTED)
def delete_transaction(
    transaction_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.delete_transaction(db, current_user.id, transaction_id)
    return Response(status_code=status.HTTP_202_ACCEPTED)
