"""
Owner scoping for id-addressed resources.

Every Get/Update/Delete on a category or transaction goes through
``get_owned_or_404``. A row that exists but belongs to someone else is
reported exactly like a missing row.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

from .errors import NotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_owned_by(row: Optional[Any], user_id: int, owner_of: Callable[[Any], Optional[int]]) -> bool:
    return row is not None and owner_of(row) == user_id


def get_owned_or_404(
    fetch: Callable[[int], Optional[T]],
    owner_of: Callable[[T], Optional[int]],
    resource_id: int,
    user_id: int,
    label: str = "Resource",
) -> T:
    """
    Fetch a row by primary key and return it only if ``user_id`` owns it.

    Args:
        fetch: Looks a row up by primary key, returning None when absent.
        owner_of: Extracts the owning user id from a row.
        resource_id: Primary key requested by the caller.
        user_id: Authenticated caller.
        label: Human readable resource name used in the error message.

    Raises:
        NotFound: If the row is absent or owned by another user.
    """
    row = fetch(resource_id)
    if not is_owned_by(row, user_id, owner_of):
        if row is not None:
            logger.warning("User %s denied access to %s %s", user_id, label.lower(), resource_id)
        raise NotFound(f"{label} doesn't exist")
    return row
