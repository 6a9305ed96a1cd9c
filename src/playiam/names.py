"""Qualified resource names used by the Google Play Developer API.

Wire formats::

    developers/{developer_id}/users/{email}
    developers/{developer_id}/users/{email}/grants/{app_id}

Parsing is positional and strict. A name that does not match raises
:class:`~playiam.exceptions.NameParseError`; identifiers are never defaulted.
"""

from __future__ import annotations

from typing import NamedTuple

from .exceptions import NameParseError

USER_NAME_SEGMENTS = 4
GRANT_NAME_SEGMENTS = 6


class UserName(NamedTuple):
    developer_id: str
    email: str


class GrantName(NamedTuple):
    developer_id: str
    email: str
    app_id: str


def _split(name: str, expected: int, kind: str) -> list[str]:
    segments = name.split("/")
    if len(segments) != expected:
        raise NameParseError(
            f"Malformed {kind} name {name!r}: expected {expected} segments, got {len(segments)}",
            name=name,
        )
    literals = {0: "developers", 2: "users", 4: "grants"}
    for index, literal in literals.items():
        if index < expected and segments[index] != literal:
            raise NameParseError(
                f"Malformed {kind} name {name!r}: segment {index + 1} must be {literal!r}, "
                f"got {segments[index]!r}",
                name=name,
            )
    for index in range(1, expected, 2):
        if not segments[index]:
            raise NameParseError(
                f"Malformed {kind} name {name!r}: segment {index + 1} is empty",
                name=name,
            )
    return segments


def parse_user_name(name: str) -> UserName:
    """Parse ``developers/{d}/users/{email}``."""
    segments = _split(name, USER_NAME_SEGMENTS, "user")
    return UserName(developer_id=segments[1], email=segments[3])


def parse_grant_name(name: str) -> GrantName:
    """Parse ``developers/{d}/users/{email}/grants/{app_id}``."""
    segments = _split(name, GRANT_NAME_SEGMENTS, "grant")
    return GrantName(developer_id=segments[1], email=segments[3], app_id=segments[5])


def format_developer_name(developer_id: str) -> str:
    return f"developers/{developer_id}"


def format_user_name(developer_id: str, email: str) -> str:
    return f"developers/{developer_id}/users/{email}"


def format_grant_name(developer_id: str, email: str, app_id: str) -> str:
    return f"developers/{developer_id}/users/{email}/grants/{app_id}"


__all__ = [
    "GrantName",
    "UserName",
    "format_developer_name",
    "format_grant_name",
    "format_user_name",
    "parse_grant_name",
    "parse_user_name",
]
