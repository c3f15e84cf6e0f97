"""Access control: decides whether a caller is the election administrator."""

from abc import ABC, abstractmethod
from enum import Enum

from election import config


class Role(Enum):
    """Who may call an operation."""
    ADMIN = "admin"
    PARTICIPANT = "participant"
    ANYONE = "anyone"


class AccessControl(ABC):
    """Abstract base class for administrator checks.

    The election only ever asks one question of its access control, so any
    role system can be plugged in by implementing `is_admin`.
    """

    @abstractmethod
    def is_admin(self, caller: str) -> bool:
        """Return True if `caller` may run privileged operations."""
        pass


class SingleAdmin(AccessControl):
    """Grants administrative rights to exactly one identity."""

    def __init__(self, admin: str | None = None):
        self.admin = admin if admin is not None else config.ADMIN_IDENTITY

    def is_admin(self, caller: str) -> bool:
        return caller == self.admin
