"""Bearer-token checks for the HTTP surface."""

import logging

from relay.core.errors import AuthError

logger = logging.getLogger(__name__)


class AuthGuard:
    """Exact-match bearer check against one shared secret.

    A missing secret configuration always fails.
    """

    @staticmethod
    def authorize(header_value: str | None, expected_secret: str | None) -> bool:
        if not expected_secret or not header_value:
            return False
        return header_value == f"Bearer {expected_secret}"


def require_bearer(expected_secret: str | None, authorization: str | None) -> None:
    """Raise AuthError unless ``authorization`` carries the expected secret."""
    if not AuthGuard.authorize(authorization, expected_secret):
        logger.warning("Unauthorized access attempt")
        raise AuthError()

