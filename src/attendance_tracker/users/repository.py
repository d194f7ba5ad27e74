from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Person


class UserRepository(Protocol):
    """Read-only roster access.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Person]:
        raise NotImplementedError

    def count_roster(self, role: Role, department: Optional[str] = None) -> int:
        raise NotImplementedError

    def list_roster(self, role: Role, department: Optional[str] = None) -> Sequence[Person]:
        raise NotImplementedError
