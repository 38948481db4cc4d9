import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Speciality(str, Enum):
    STRENGTH = "Strength"
    CARDIO = "Cardio"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Speciality":
        try:
            return cls(value)
        except ValueError:
            return cls.STRENGTH


@dataclass
class Trainer:
    """
    A trainer employed by the gym. Trainers carry no payment status.
    """
    id: str
    name: str
    phone: str
    speciality: Speciality = Speciality.STRENGTH
    photo_path: Optional[str] = None

    @classmethod
    def new(cls, name: str, phone: str,
            speciality: Speciality = Speciality.STRENGTH,
            photo_path: Optional[str] = None) -> "Trainer":
        return cls(id=uuid.uuid4().hex, name=name, phone=phone,
                   speciality=speciality, photo_path=photo_path)
