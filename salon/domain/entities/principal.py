from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    admin = "admin"
    customer = "customer"


@dataclass(frozen=True)
class Principal:
    uid: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin
