"""Integration tests for the employee API."""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_employee_crud_flow(client: AsyncClient, make_payload) -> None:
    """An employee can be created, fetched, updated, listed and deleted."""

    create_response = await client.post(
        "/api/employees",
        json=make_payload(firstName="John", lastName="Doe", email="John.Doe@x.com", salary=75000),
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["email"] == "john.doe@x.com"
    assert created["fullName"] == "John Doe"
    employee_id = created["_id"]

    get_response = await client.get(f"/api/employees/{employee_id}")
    assert get_response.status_code == 200
    assert get_response.json() == created

    update_response = await client.put(f"/api/employees/{employee_id}", json={"position": "Lead"})
    assert update_response.status_code == 200
    assert update_response.json()["position"] == "Lead"

    list_response = await client.get("/api/employees")
    assert list_response.status_code == 200
    body = list_response.json()
    assert [e["_id"] for e in body["employees"]] == [employee_id]
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalEmployees": 1,
        "hasNext": False,
        "hasPrev": False,
    }

    delete_response = await client.delete(f"/api/employees/{employee_id}")
    assert delete_response.status_code == 200
    assert delete_response.json() == {"message": "Employee deleted successfully"}

    missing = await client.get(f"/api/employees/{employee_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Employee not found"}


@pytest.mark.asyncio
async def test_create_rejects_invalid_payload_with_joined_messages(client: AsyncClient, make_payload) -> None:
    response = await client.post("/api/employees", json=make_payload(firstName="", salary=-5))

    assert response.status_code == 400
    assert response.json() == {"error": "First name is required, Salary must be a non-negative number"}


@pytest.mark.asyncio
async def test_duplicate_email_is_a_bad_request(client: AsyncClient, make_payload) -> None:
    first = await client.post("/api/employees", json=make_payload(email="a@example.com"))
    second = await client.post("/api/employees", json=make_payload(email="b@example.com"))
    assert first.status_code == second.status_code == 201

    duplicate = await client.post("/api/employees", json=make_payload(email="A@example.com"))
    clash = await client.put(f"/api/employees/{second.json()['_id']}", json={"email": "a@example.com"})

    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Email already exists"}
    assert clash.status_code == 400
    assert clash.json() == {"error": "Email already exists"}


@pytest.mark.asyncio
async def test_update_and_delete_unknown_ids_are_not_found(client: AsyncClient) -> None:
    update = await client.put("/api/employees/nope", json={"position": "Lead"})
    delete = await client.delete("/api/employees/nope")

    assert update.status_code == 404
    assert delete.status_code == 404
    assert delete.json() == {"error": "Employee not found"}


@pytest.mark.asyncio
async def test_list_searches_sorts_and_paginates(client: AsyncClient, make_payload) -> None:
    for index, last_name in enumerate(["Doe", "Adams", "Doering", "Baker", "Dodd"]):
        response = await client.post(
            "/api/employees",
            json=make_payload(email=f"user{index}@example.com", lastName=last_name),
        )
        assert response.status_code == 201

    page_one = await client.get("/api/employees", params={"search": "do", "limit": 2, "sortOrder": "desc"})
    page_two = await client.get(
        "/api/employees", params={"search": "do", "limit": 2, "page": 2, "sortOrder": "desc"}
    )

    first, second = page_one.json(), page_two.json()
    assert [e["lastName"] for e in first["employees"]] == ["Doering", "Doe"]
    assert [e["lastName"] for e in second["employees"]] == ["Dodd"]
    assert first["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalEmployees": 3,
        "hasNext": True,
        "hasPrev": False,
    }
    assert second["pagination"]["hasNext"] is False
    assert second["pagination"]["hasPrev"] is True


@pytest.mark.asyncio
async def test_list_rejects_invalid_paging(client: AsyncClient) -> None:
    response = await client.get("/api/employees", params={"page": 0})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_stats_summary(client: AsyncClient, make_payload) -> None:
    empty = await client.get("/api/employees/stats/summary")
    assert empty.json() == {"totalEmployees": 0, "departmentStats": [], "averageSalary": 0.0}

    departments = ["Engineering", "Product", "Design", "Engineering", "Marketing"]
    for index, department in enumerate(departments):
        await client.post(
            "/api/employees",
            json=make_payload(email=f"e{index}@example.com", department=department, salary=1000 * (index + 1)),
        )

    response = await client.get("/api/employees/stats/summary")

    assert response.status_code == 200
    body = response.json()
    assert body["totalEmployees"] == 5
    assert body["departmentStats"][0] == {"_id": "Engineering", "count": 2}
    assert {item["_id"] for item in body["departmentStats"][1:]} == {"Product", "Design", "Marketing"}
    assert body["averageSalary"] == 3000.0


@pytest.mark.asyncio
async def test_unknown_route_and_health(client: AsyncClient) -> None:
    missing = await client.get("/api/nothing-here")
    health = await client.get("/health")

    assert missing.status_code == 404
    assert missing.json() == {"error": "Route not found"}
    assert health.json()["status"] == "ok"
    assert health.json()["backend"] in {"file", "database"}


@pytest.mark.asyncio
async def test_out_of_range_numbers_are_bad_requests(client: AsyncClient, make_payload) -> None:
    huge_salary = await client.post(
        "/api/employees",
        content='{"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com", '
        '"phone": "5550001111", "position": "Engineer", "department": "R&D", "salary": ' + "9" * 400 + "}",
        headers={"Content-Type": "application/json"},
    )
    early_hire = await client.post("/api/employees", json=make_payload(hireDate="0001-01-01T00:00:00+05:00"))

    assert huge_salary.status_code == 400
    assert huge_salary.json() == {"error": "Salary must be a non-negative number"}
    assert early_hire.status_code == 400
    assert early_hire.json() == {"error": "Please enter a valid hire date"}
