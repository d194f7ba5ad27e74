from __future__ import annotations

from attendance_tracker.core.enums import Role
from attendance_tracker.users.model import Person
from attendance_tracker.users.mysql_user_repository import MySQLUserRepository

from conftest import FakeConnFactory, FakeConnection


def repo_with(**kwargs):
    conn = FakeConnection(**kwargs)
    return MySQLUserRepository(FakeConnFactory(conn)), conn


def user_row(user_id: int, department="Sales", role="employee", is_active=1):
    return {
        "user_id": user_id,
        "employee_id": f"EMP{user_id:03d}",
        "full_name": f"Person {user_id}",
        "email": f"p{user_id}@example.com",
        "role": role,
        "department": department,
        "is_active": is_active,
    }


def test_get_by_id_maps_row():
    repo, conn = repo_with(rows=[user_row(3, role="manager")])

    person = repo.get_by_id(3)

    assert person == Person(
        user_id=3,
        employee_id="EMP003",
        full_name="Person 3",
        email="p3@example.com",
        role=Role.MANAGER,
        department="Sales",
        is_active=True,
    )
    assert conn.executed[0][1] == (3,)


def test_get_by_id_unknown_is_none():
    repo, _ = repo_with(rows=[])
    assert repo.get_by_id(99) is None


def test_list_roster_filters_role_active_and_department():
    repo, conn = repo_with(rows=[user_row(3), user_row(5)])

    roster = repo.list_roster(Role.EMPLOYEE, "Sales")

    sql, params = conn.executed[0]
    assert "WHERE role=%s AND is_active=1 AND department=%s" in sql
    assert "ORDER BY employee_id ASC" in sql
    assert params == ("employee", "Sales")
    assert [p.user_id for p in roster] == [3, 5]


def test_list_roster_without_department_has_no_department_clause():
    repo, conn = repo_with(rows=[user_row(1, department=None)])

    roster = repo.list_roster(Role.EMPLOYEE)

    sql, params = conn.executed[0]
    assert "WHERE role=%s AND is_active=1 ORDER BY" in sql
    assert "department=%s" not in sql
    assert params == ("employee",)
    assert roster[0].department is None


def test_count_roster_uses_roster_filter():
    repo, conn = repo_with(rows=[{"total": 6}])

    total = repo.count_roster(Role.EMPLOYEE, "Sales")

    sql, params = conn.executed[0]
    assert total == 6
    assert sql == "SELECT COUNT(*) AS total FROM users WHERE role=%s AND is_active=1 AND department=%s"
    assert params == ("employee", "Sales")


def test_count_roster_for_managers_across_departments():
    repo, conn = repo_with(rows=[{"total": 2}])

    assert repo.count_roster(Role.MANAGER) == 2
    assert conn.executed[0][1] == ("manager",)
