"""Authentication boundary.

The calendar core only needs to know whether someone is signed in and
which user id to attribute writes to.
"""

import logging
from typing import Protocol

from planisphere.exceptions import AuthRequiredError

logger = logging.getLogger(__name__)


class AuthProvider(Protocol):
    """Source of the current user identity."""

    def current_user_id(self) -> str | None:
        """Id of the signed-in user, or None."""
        ...


class StaticAuthProvider:
    """Auth provider holding a single user id set in-process."""

    def __init__(self, user_id: str | None = None):
        self._user_id = user_id

    def current_user_id(self) -> str | None:
        return self._user_id

    def sign_in(self, user_id: str) -> None:
        logger.info(f"Signed in as {user_id}")
        self._user_id = user_id

    def sign_out(self) -> None:
        logger.info("Signed out")
        self._user_id = None


def require_user(auth: AuthProvider) -> str:
    """Return the current user id or fail fast.

    Raises:
        AuthRequiredError: If nobody is signed in.
    """
    user_id = auth.current_user_id()
    if not user_id:
        raise AuthRequiredError()
    return user_id
