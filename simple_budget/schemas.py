"""
Pydantic request/response models.

Request fields are all optional at the schema level; required-field checks
happen in the services so the caller gets a message naming the first
missing field.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def drop_non_strings(cls, v):
        """Anything but a string counts as no credential at all."""
        return v if isinstance(v, str) else None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str]
    email: str
    joined: dt.datetime


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    user_id: Optional[int]
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class TransactionCreate(BaseModel):
    venue: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    comments: Optional[str] = None
    category_id: Optional[int] = None
    date: Optional[dt.date] = None


class TransactionUpdate(BaseModel):
    venue: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    comments: Optional[str] = None
    category_id: Optional[int] = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    venue: str
    amount: Decimal
    comments: Optional[str]
    category_id: Optional[int]
    user_id: Optional[int]
    date: dt.date
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
