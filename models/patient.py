"""
models/patient.py
-----------------
Domain model for patient records.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Patient:
    """
    Represents a registered patient.

    Attributes:
        name: Full name, trimmed.
        age: Age in whole years (0 or more).
        gender: 'M' or 'F'.
        phone: Ten digits kept as text so leading zeros survive.
        id: Database primary key (None for new records).
    """
    name: str
    age: int
    gender: str  # 'M' | 'F'
    phone: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"#{self.id} {self.name} ({self.age}, {self.gender}) | {self.phone}"
