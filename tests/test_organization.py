from fastapi import status

from reviewhub.models.department import Department
from reviewhub.models.organization import Organization


def test_save_organization(client, admin_user, auth_headers, db_session):
    response = client.post("/api/organization/save", headers=auth_headers(admin_user), json={
        "name": "Globex",
        "address": "1 Main St"
    })
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Globex"
    assert data["email"] == admin_user.email
    assert data["departments"] == []
    assert db_session.query(Organization).count() == 1


def test_save_organization_twice_conflicts(client, admin_headers):
    response = client.post("/api/organization/save", headers=admin_headers, json={"name": "Again"})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_get_organization_without_one_is_404(client, admin_user, auth_headers):
    response = client.get("/api/organization/", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_organization(client, admin_headers):
    response = client.put("/api/organization/", headers=admin_headers, json={
        "name": "Acme Worldwide",
        "email": "hello@acme.com",
        "logoUrl": "https://cdn.acme.com/logo.png"
    })
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Acme Worldwide"
    assert data["logoUrl"] == "https://cdn.acme.com/logo.png"


def test_employee_cannot_manage_organization(client, make_employee, auth_headers, db_session):
    from reviewhub.models.user import User
    alice = make_employee("Alice", with_login=True)
    user = db_session.query(User).filter(User.id == alice.user_id).first()
    response = client.get("/api/organization/", headers=auth_headers(user))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_add_and_list_departments(client, admin_headers, make_employee, department):
    make_employee("Alice", department=department)
    created = client.post("/api/organization/departments", headers=admin_headers, json={"departmentName": "Sales"})
    assert created.status_code == status.HTTP_201_CREATED

    response = client.get("/api/organization/departments", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    listed = {d["name"]: d["employeeCount"] for d in response.json()}
    assert listed == {"Engineering": 1, "Sales": 0}

    profile = client.get("/api/organization/", headers=admin_headers).json()
    assert profile["departments"] == ["Engineering", "Sales"]


def test_duplicate_department(client, admin_headers, department):
    response = client.post("/api/organization/departments", headers=admin_headers, json={"departmentName": "Engineering"})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["errors"][0]["code"] == "DEPARTMENT_EXISTS"


def test_delete_department_in_use_is_rejected(client, admin_headers, make_employee, department, db_session):
    make_employee("Alice", department=department)

    check = client.get("/api/organization/departments/Engineering/check", headers=admin_headers)
    assert check.json() == {"inUse": True}

    response = client.delete("/api/organization/departments/Engineering", headers=admin_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["errors"][0]["code"] == "DEPARTMENT_IN_USE"
    assert db_session.query(Department).filter(Department.name == "Engineering").count() == 1


def test_delete_unused_department(client, admin_headers, department, db_session):
    assert client.get("/api/organization/departments/Engineering/check", headers=admin_headers).json() == {"inUse": False}
    response = client.delete("/api/organization/departments/Engineering", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert db_session.query(Department).count() == 0


def test_delete_missing_department(client, admin_headers):
    response = client.delete("/api/organization/departments/Nowhere", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
