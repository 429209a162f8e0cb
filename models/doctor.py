"""
models/doctor.py
----------------
Domain model for doctor records.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Doctor:
    """
    Represents a doctor on staff.

    Attributes:
        name: Full name, trimmed.
        specialty: Field of practice (e.g., 'Cardiology').
        phone: Ten digits kept as text.
        id: Database primary key (None for new records).
    """
    name: str
    specialty: str
    phone: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"#{self.id} {self.name} | {self.specialty} | {self.phone}"
