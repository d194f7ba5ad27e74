from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import UserRepository

_PERSON_COLUMNS = "user_id, employee_id, full_name, email, role, department, is_active"


def _to_person(row: Dict[str, Any]) -> Person:
    return Person(
        user_id=int(row["user_id"]),
        employee_id=row["employee_id"],
        full_name=row["full_name"],
        email=row["email"],
        role=Role(row["role"]),
        department=row.get("department"),
        is_active=bool(row.get("is_active", True)),
    )


def _roster_filter(role: Role, department: Optional[str]):
    clauses = ["role=%s", "is_active=1"]
    params: list[object] = [role.value]
    if department is not None:
        clauses.append("department=%s")
        params.append(department)
    return " AND ".join(clauses), tuple(params)


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PERSON_COLUMNS}
                FROM users
                WHERE user_id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return _to_person(row) if row else None

    def count_roster(self, role: Role, department: Optional[str] = None) -> int:
        where, params = _roster_filter(role, department)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM users WHERE {where}", params)
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_roster(self, role: Role, department: Optional[str] = None) -> Sequence[Person]:
        where, params = _roster_filter(role, department)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PERSON_COLUMNS}
                FROM users
                WHERE {where}
                ORDER BY employee_id ASC
                """,
                params,
            )
            return [_to_person(r) for r in fetchall(cur)]
