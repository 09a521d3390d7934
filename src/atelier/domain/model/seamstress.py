"""Seamstress aggregate — a member of the sewing roster."""

from __future__ import annotations

from dataclasses import dataclass

from atelier.domain.exceptions import ValidationError


@dataclass
class Seamstress:
    """A worker who receives cut pieces to sew.

    Splits keep their own copy of the seamstress name, so renaming or
    deactivating a seamstress leaves past distributions untouched.
    """

    id: str | None
    name: str
    phone: str = ""
    specialty: str = ""
    address: str = ""
    city: str = ""
    active: bool = True

    @staticmethod
    def register(
        name: str,
        phone: str = "",
        specialty: str = "",
        address: str = "",
        city: str = "",
    ) -> Seamstress:
        if not name or not name.strip():
            raise ValidationError("Seamstress name is required")
        return Seamstress(
            id=None,
            name=name.strip(),
            phone=phone.strip(),
            specialty=specialty.strip(),
            address=address.strip(),
            city=city.strip(),
        )

    def update_contact(
        self,
        name: str | None = None,
        phone: str | None = None,
        specialty: str | None = None,
        address: str | None = None,
        city: str | None = None,
    ) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Seamstress name is required")
            self.name = name.strip()
        if phone is not None:
            self.phone = phone.strip()
        if specialty is not None:
            self.specialty = specialty.strip()
        if address is not None:
            self.address = address.strip()
        if city is not None:
            self.city = city.strip()

    def deactivate(self) -> None:
        if not self.active:
            raise ValidationError(f"Seamstress '{self.name}' is already inactive")
        self.active = False

    def activate(self) -> None:
        if self.active:
            raise ValidationError(f"Seamstress '{self.name}' is already active")
        self.active = True
