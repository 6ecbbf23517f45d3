"""CMS session authentication on top of the JWT service."""

from .auth_service import AuthService, USER_CLAIM

__all__ = ["AuthService", "USER_CLAIM"]
