import httpx
import pytest

from app.main import create_app
from tests.helpers import (
    ACCOUNTANT,
    ACME_USER,
    ADMIN,
    CPR_A,
    INSTRUCTOR,
    SUPER_ADMIN,
    billing_ready_course,
    completed_course,
    headers,
)

pytestmark = pytest.mark.anyio

ERROR_KEYS = {"code", "message", "details", "correlation_id"}


@pytest.fixture
async def client(container):
    app = create_app(container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _assert_error(response, status: int, code: str) -> dict:
    assert response.status_code == status
    body = response.json()
    assert body["code"] == code
    assert body["message"]
    assert set(body) <= ERROR_KEYS
    return body


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["checks"]["relay"] == "disabled"


async def test_missing_identity_is_unauthorized(client):
    response = await client.get("/courses/mine")
    _assert_error(response, 401, "unauthorized")


async def test_request_course(client):
    response = await client.post(
        "/courses",
        json={"course_type_id": CPR_A, "location": "Main Hall", "students_registered": 10},
        headers=headers(ACME_USER),
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["course_number"] == "20260302-ACME-CPRA"
    assert data["status"] == "pending"

    listed = await client.get("/courses/mine", headers=headers(ACME_USER))
    assert [c["id"] for c in listed.json()["data"]] == [data["id"]]


async def test_request_body_is_validated(client):
    response = await client.post(
        "/courses",
        json={"course_type_id": CPR_A, "location": "", "students_registered": -1},
        headers=headers(ACME_USER),
    )
    body = _assert_error(response, 422, "validation_error")
    assert body["details"]["errors"]


async def test_error_echoes_the_request_id(client):
    response = await client.post(
        "/courses/404/cancel",
        headers={**headers(ADMIN), "X-Request-ID": "req-123"},
    )
    body = _assert_error(response, 404, "not_found")
    assert body["correlation_id"] == "req-123"
    assert response.headers["X-Request-ID"] == "req-123"


async def test_role_gate(client):
    response = await client.post(
        "/courses/1/schedule",
        json={"instructor_id": INSTRUCTOR.user_id, "date_scheduled": "2026-03-10"},
        headers=headers(ACCOUNTANT),
    )
    _assert_error(response, 403, "forbidden")


async def test_invoice_flow(client, container):
    course = await billing_ready_course(container, roster=15, attended=12)

    created = await client.post("/invoices", json={"course_id": course.id}, headers=headers(ACCOUNTANT))
    assert created.status_code == 201
    invoice = created.json()["data"]
    assert invoice["amount"] == "600.00"
    assert invoice["due_date"] == "2026-04-01"
    assert invoice["status"] == "pending"

    again = await client.post("/invoices", json={"course_id": course.id}, headers=headers(ACCOUNTANT))
    _assert_error(again, 409, "conflict")

    paid = await client.post(
        f"/invoices/{invoice['id']}/payments", json={"amount": "600"}, headers=headers(ACCOUNTANT)
    )
    assert paid.status_code == 201
    confirmed = await client.post(f"/invoices/{invoice['id']}/mark-paid", headers=headers(ACCOUNTANT))
    assert confirmed.json()["data"]["status"] == "paid"

    detail = await client.get(f"/invoices/{invoice['id']}", headers=headers(ACCOUNTANT))
    assert detail.json()["data"]["balance"] == "0.00"


async def test_missing_pricing_rule_is_unprocessable(client, container):
    course = await completed_course(container, roster=1, attended=1)
    response = await client.post(f"/courses/{course.id}/billing-ready", headers=headers(ADMIN))
    body = _assert_error(response, 422, "missing_pricing_rule")
    assert body["details"] == {"organization_id": course.organization_id, "course_type_id": course.course_type_id}


async def test_pricing_rule_delete_returns_no_content(client):
    created = await client.post(
        "/pricing-rules",
        json={"organization_id": 1, "course_type_id": CPR_A, "price": "50"},
        headers=headers(SUPER_ADMIN),
    )
    assert created.status_code == 201
    rule_id = created.json()["data"]["id"]

    deleted = await client.delete(f"/pricing-rules/{rule_id}", headers=headers(SUPER_ADMIN))
    assert deleted.status_code == 204
    missing = await client.delete(f"/pricing-rules/{rule_id}", headers=headers(SUPER_ADMIN))
    _assert_error(missing, 404, "not_found")
