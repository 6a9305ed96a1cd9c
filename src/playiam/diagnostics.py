"""Diagnostics collected while validating, planning and applying resources.

Every lifecycle operation returns exactly one :class:`Diagnostics` collection.
Warnings never block an operation; any error halts further mutation.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A single operator-facing message."""

    model_config = {"frozen": True}

    severity: Severity
    summary: str
    detail: str = ""
    attribute: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.attribute}: " if self.attribute else ""
        return f"{self.severity.value}: {prefix}{self.summary}: {self.detail}"


class Diagnostics:
    """Ordered, append-only collection of diagnostics."""

    def __init__(self, items: Iterable[Diagnostic] = ()) -> None:
        self._items: list[Diagnostic] = list(items)

    def add_error(self, summary: str, detail: str = "", attribute: str | None = None) -> None:
        self._items.append(
            Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail, attribute=attribute)
        )

    def add_warning(self, summary: str, detail: str = "", attribute: str | None = None) -> None:
        self._items.append(
            Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail, attribute=attribute)
        )

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self._items.extend(other)

    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.ERROR]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.WARNING]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"


__all__ = [
    "Diagnostic",
    "Diagnostics",
    "Severity",
]
