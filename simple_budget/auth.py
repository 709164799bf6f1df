"""
Authentication gate and account registration.

Credentials arrive either as an HTTP Basic ``Authorization`` header
(base64 of ``email:password``) or, for sign-in only, as a JSON body.
"""

import base64
import binascii
import logging
from typing import NamedTuple, Optional

import bcrypt
from fastapi import Depends, Header
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import config
from .db import models
from .db.session import get_db
from .errors import BadRequest, Unauthorized
from .schemas import RegisterRequest

logger = logging.getLogger(__name__)

REGISTRATION_FIELDS = ("name", "email", "password")
MAX_NAME_LENGTH = 50
# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72

_dummy_hash: Optional[bytes] = None


class BasicCredentials(NamedTuple):
    email: str
    password: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def _burn_password_check(password: str) -> None:
    """Spend the same bcrypt work as a real check when the email is unknown."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"simple-budget", bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS))
    verify_password(password, _dummy_hash.decode("utf-8"))


def parse_basic_auth(header: Optional[str]) -> Optional[BasicCredentials]:
    """
    Decode an HTTP Basic ``Authorization`` header value.

    Returns None for anything that is not a well formed ``Basic`` header
    carrying ``email:password`` with a non-empty email.
    """
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "basic" or not token.strip():
        return None
    try:
        decoded = base64.b64decode(token.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    email, sep, password = decoded.partition(":")
    if not sep or not email.strip():
        return None
    return BasicCredentials(email=email, password=password)


def authenticate(db: Session, email: str, password: str) -> models.User:
    """Resolve credentials to a User or raise Unauthorized."""
    email = normalize_email(email)
    login = db.query(models.Login).filter(models.Login.email == email).first()
    if login is None:
        _burn_password_check(password)
        logger.info("Rejected credentials for unknown account")
        raise Unauthorized()
    if not verify_password(password, login.hash):
        logger.info("Rejected credentials for login id=%s", login.id)
        raise Unauthorized()

    user = db.query(models.User).filter(models.User.email == email).first()
    if user is None:
        logger.warning("Login id=%s has no matching user row", login.id)
        raise Unauthorized()
    return user


def register_user(db: Session, payload: RegisterRequest) -> models.User:
    """
    Create a User and its Login credential in one database transaction.

    Raises:
        BadRequest: If a required field is missing or empty, a field is
            out of bounds, or the email is already registered.
    """
    for field in REGISTRATION_FIELDS:
        value = getattr(payload, field)
        if value is None or not value.strip():
            raise BadRequest(f"Missing '{field}' in request body")

    name = payload.name.strip()
    email = normalize_email(payload.email)
    if len(name) > MAX_NAME_LENGTH:
        raise BadRequest(f"'name' must be at most {MAX_NAME_LENGTH} characters")
    if "@" not in email:
        raise BadRequest("'email' must be a valid email address")
    if len(payload.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise BadRequest(f"'password' must be at most {MAX_PASSWORD_BYTES} bytes")

    existing = db.query(models.Login).filter(models.Login.email == email).first()
    if existing is not None or db.query(models.User).filter(models.User.email == email).first():
        raise BadRequest("Email already registered")

    user = models.User(name=name, email=email)
    login = models.Login(email=email, hash=get_password_hash(payload.password))
    db.add_all([user, login])
    try:
        db.commit()
    except IntegrityError:
        # concurrent registration of the same email
        db.rollback()
        raise BadRequest("Email already registered")
    db.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return user


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> models.User:
    """FastAPI dependency: the user named by the Basic ``Authorization`` header."""
    credentials = parse_basic_auth(authorization)
    if credentials is None:
        raise Unauthorized("Missing basic token")
    return authenticate(db, credentials.email, credentials.password)
