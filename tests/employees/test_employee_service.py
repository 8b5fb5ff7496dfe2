import pytest
from werkzeug.security import generate_password_hash

from src.geo_attendance.geo_attendance.core.enums import Role
from src.geo_attendance.geo_attendance.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.geo_attendance.geo_attendance.employees.service import AuthService, EmployeeService


def _registration(**overrides):
    data = {
        "first_name": "Pranay",
        "last_name": "Sharma",
        "email": "Pranay@Acme.test",
        "password": "secret1",
        "company_name": "Acme",
        "branch_name": "Main Office",
        "profile_pic": "pranay.png",
    }
    data.update(overrides)
    return data


@pytest.fixture
def service(employees_repo, offices_repo):
    return EmployeeService(employees_repo, offices_repo)


def test_register_hashes_password_and_hides_it(service, employees_repo):
    user = service.register(**_registration())

    assert user["email"] == "pranay@acme.test"
    assert user["role"] == Role.EMPLOYEE.value
    assert "password" not in user and "passwordHash" not in user
    assert employees_repo.get_by_id(user["id"]).password_hash != "secret1"


def test_duplicate_email_is_a_conflict(service):
    service.register(**_registration())

    with pytest.raises(ConflictError):
        service.register(**_registration(email="pranay@acme.test"))


def test_register_requires_an_existing_office(service):
    with pytest.raises(ValidationError):
        service.register(**_registration(branch_name="Moon Base"))


@pytest.mark.parametrize(
    "overrides",
    [{"email": "not-an-email"}, {"password": "123"}, {"first_name": " "}, {"profile_pic": ""}],
)
def test_register_validates_input(service, overrides):
    with pytest.raises(ValidationError):
        service.register(**_registration(**overrides))


def test_lookup_by_branch(service):
    service.register(**_registration())
    service.register(**_registration(email="asha@acme.test", first_name="Asha"))

    found = service.lookup_by_branch(company_name="Acme", branch_name="Main Office")

    assert [e["firstName"] for e in found] == ["Pranay", "Asha"]
    assert all(e["employeeCount"] == 2 for e in found)

    with pytest.raises(NotFoundError):
        service.lookup_by_branch(company_name="Acme", branch_name="Branch Office")


def test_get_and_delete(service):
    user = service.register(**_registration())

    assert service.get(user["id"])["name"] == "Pranay Sharma"
    service.delete(user["id"])
    with pytest.raises(NotFoundError):
        service.get(user["id"])
    with pytest.raises(NotFoundError):
        service.delete(user["id"])


def test_authenticate(employees_repo):
    employees_repo.create(
        first_name="Admin",
        last_name="User",
        email="admin@example.com",
        password_hash=generate_password_hash("admin123"),
        company_name="Acme",
        branch_name="Main Office",
        profile_pic="",
        role=Role.ADMIN,
    )
    auth = AuthService(employees_repo)

    s_employee = auth.authenticate(" Admin@Example.com ", "admin123")

    assert s_employee.role == Role.ADMIN
    assert s_employee.full_name == "Admin User"
    with pytest.raises(AuthenticationError):
        auth.authenticate("admin@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody@example.com", "admin123")


def test_placeholder_hash_never_authenticates(employees_repo):
    employees_repo.create(
        first_name="Old",
        last_name="Row",
        email="old@acme.test",
        password_hash="placeholder",
        company_name="Acme",
        branch_name="Main Office",
        profile_pic="",
    )

    with pytest.raises(AuthenticationError):
        AuthService(employees_repo).authenticate("old@acme.test", "placeholder")
