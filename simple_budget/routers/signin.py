from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from .. import auth
from ..db.session import get_db
from ..errors import Unauthorized
from ..schemas import RegisterRequest, SigninRequest, UserOut

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserOut)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return the new user."""
    return auth.register_user(db, payload)


@router.post("/signin", response_model=UserOut)
def signin(
    payload: Optional[SigninRequest] = None,
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
):
    """Check credentials from the Basic header, falling back to the JSON body."""
    credentials = auth.parse_basic_auth(authorization)
    if credentials is None and payload is not None and payload.email and payload.password:
        credentials = auth.BasicCredentials(email=payload.email, password=payload.password)
    if credentials is None:
        raise Unauthorized("Missing credentials")
    return auth.authenticate(db, credentials.email, credentials.password)
