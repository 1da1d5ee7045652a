"""Caller identity as handed over by the authentication layer.

Authentication itself happens upstream; the ordering context only
receives who is calling and in which role, and decides what they may see.
"""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    SELLER = "SELLER"


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class AccessDenied(Exception):
    """The caller is identified but may not see or change the resource."""

    def __init__(self, message: str = "Not allowed"):
        self.message = message
        super().__init__(message)
