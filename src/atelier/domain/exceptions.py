"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The backing store could not be read or written."""


@dataclass(frozen=True)
class Shortage:
    fabric: str
    color: str
    required: Decimal
    available: Decimal

    @property
    def missing(self) -> Decimal:
        return self.required - self.available


class InsufficientStockError(ValidationError):
    """Fabric stock cannot cover a cutting transition.

    Carries every short color, not just the first one found.
    """

    def __init__(self, shortages: list[Shortage]) -> None:
        self.shortages = list(shortages)
        details = "; ".join(
            f"{s.fabric}/{s.color}: need {s.required} rolls, "
            f"have {s.available} (missing {s.missing})"
            for s in self.shortages
        )
        super().__init__(f"Insufficient fabric stock — {details}")
