from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Person:
    """Domain entity: a person on the roster.

    Owned by the identity side of the system; the attendance core only reads
    the role and department for grouping.
    """

    user_id: int
    employee_id: str
    full_name: str
    email: str
    role: Role
    department: Optional[str] = None
    is_active: bool = True
