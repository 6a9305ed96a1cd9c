"""Google Play Developer API client for users and grants."""

from .models import Grant, ListUsersPage, User
from .users import GooglePlayUsersClient

__all__ = [
    "GooglePlayUsersClient",
    "Grant",
    "ListUsersPage",
    "User",
]
