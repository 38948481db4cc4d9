import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class Admin:
    """
    The gym owner's profile.
    Credentials are handled by the auth service and never stored here.
    Admin records are only ever edited, never deleted: members and trainers
    would be left without an owner.
    """
    id: str
    name: str
    gym_name: str
    gym_address: str
    photo_path: Optional[str] = None

    @classmethod
    def new(cls, name: str, gym_name: str, gym_address: str,
            photo_path: Optional[str] = None) -> "Admin":
        return cls(id=uuid.uuid4().hex, name=name, gym_name=gym_name,
                   gym_address=gym_address, photo_path=photo_path)
