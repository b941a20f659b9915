"""
Name: Daily Report Endpoint Tests

Responsibilities:
  - CRUD status codes (201 / 200 / 204)
  - Forbidden reads/writes are reported as 404 (no existence leak)
  - RFC 7807 bodies for validation / conflict errors
  - Listing filters and today check
"""

from datetime import date, timedelta

import pytest

pytestmark = pytest.mark.unit

DAY = "2024-01-15"


def _body(**overrides) -> dict:
    body = {
        "title": "Daily",
        "work_content": "Closed three support tickets.",
        "report_date": DAY,
        "status": "draft",
    }
    body.update(overrides)
    return body


@pytest.fixture
def create_report(client, auth_for):
    def _create(user, **overrides):
        response = client.post(
            "/api/daily-reports", json=_body(**overrides), headers=auth_for(user)
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def test_create_returns_201_with_owner_data(client, seed_org, auth_for):
    response = client.post(
        "/api/daily-reports",
        json=_body(status="submitted"),
        headers=auth_for(seed_org["employee"]),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == seed_org["employee"].id
    assert body["username"] == "user1"
    assert body["display_name"] == "User1"
    assert body["status"] == "submitted"
    assert body["report_date"] == DAY
    assert body["submitted_at"] is not None


def test_duplicate_day_returns_409(client, seed_org, auth_for, create_report):
    create_report(seed_org["employee"])

    response = client.post(
        "/api/daily-reports", json=_body(), headers=auth_for(seed_org["employee"])
    )

    assert response.status_code == 409
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "CONFLICT"


def test_validation_errors_return_422_with_field_details(client, seed_org, auth_for):
    response = client.post(
        "/api/daily-reports",
        json=_body(title="", work_content="short", status="archived"),
        headers=auth_for(seed_org["employee"]),
    )

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["errors"] if "field" in e}
    assert fields == {"title", "work_content", "status"}


def test_requests_without_token_are_401(client, seed_org):
    assert client.post("/api/daily-reports", json=_body()).status_code == 401
    assert client.get("/api/daily-reports/my").status_code == 401


def test_owner_and_supervisor_read_others_get_404(
    client, seed_org, auth_for, create_report
):
    report_id = create_report(seed_org["employee"])["id"]
    url = f"/api/daily-reports/{report_id}"

    assert client.get(url, headers=auth_for(seed_org["employee"])).status_code == 200
    assert client.get(url, headers=auth_for(seed_org["supervisor"])).status_code == 200

    for outsider in ("peer", "other_supervisor", "admin"):
        response = client.get(url, headers=auth_for(seed_org[outsider]))
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


def test_missing_report_is_404(client, seed_org, auth_for):
    response = client.get("/api/daily-reports/999", headers=auth_for(seed_org["employee"]))

    assert response.status_code == 404


def test_update_by_owner(client, seed_org, auth_for, create_report):
    created = create_report(seed_org["employee"], status="submitted")

    response = client.put(
        f"/api/daily-reports/{created['id']}",
        json=_body(title="Edited", status="draft"),
        headers=auth_for(seed_org["employee"]),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Edited"
    assert body["status"] == "draft"
    assert body["submitted_at"] is None


def test_supervisor_cannot_update_or_delete(client, seed_org, auth_for, create_report):
    report_id = create_report(seed_org["employee"])["id"]
    headers = auth_for(seed_org["supervisor"])

    put = client.put(
        f"/api/daily-reports/{report_id}", json=_body(title="Nope"), headers=headers
    )
    delete = client.delete(f"/api/daily-reports/{report_id}", headers=headers)

    assert put.status_code == 404
    assert delete.status_code == 404
    still_there = client.get(
        f"/api/daily-reports/{report_id}", headers=auth_for(seed_org["employee"])
    )
    assert still_there.json()["title"] == "Daily"


def test_delete_by_owner_returns_204(client, seed_org, auth_for, create_report):
    report_id = create_report(seed_org["employee"])["id"]
    headers = auth_for(seed_org["employee"])

    response = client.delete(f"/api/daily-reports/{report_id}", headers=headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/daily-reports/{report_id}", headers=headers).status_code == 404


def test_my_reports_with_status_filter(client, seed_org, auth_for, create_report):
    employee = seed_org["employee"]
    create_report(employee, status="submitted")
    create_report(employee, report_date="2024-01-14")
    create_report(seed_org["peer"])

    all_mine = client.get("/api/daily-reports/my", headers=auth_for(employee))
    submitted = client.get(
        "/api/daily-reports/my", params={"status": "submitted"}, headers=auth_for(employee)
    )
    invalid = client.get(
        "/api/daily-reports/my", params={"status": "archived"}, headers=auth_for(employee)
    )

    assert [r["report_date"] for r in all_mine.json()] == ["2024-01-15", "2024-01-14"]
    assert [r["status"] for r in submitted.json()] == ["submitted"]
    assert invalid.status_code == 422


def test_listing_uses_content_preview(client, seed_org, auth_for, create_report):
    create_report(seed_org["employee"], work_content="z" * 300)

    [row] = client.get(
        "/api/daily-reports/my", headers=auth_for(seed_org["employee"])
    ).json()

    assert row["work_content"] == "z" * 100 + "..."
    assert "updated_at" not in row


def test_subordinate_reports(client, seed_org, auth_for, create_report):
    create_report(seed_org["employee"])
    create_report(seed_org["peer"])

    mine = client.get(
        "/api/daily-reports/subordinates", headers=auth_for(seed_org["supervisor"])
    )
    none = client.get(
        "/api/daily-reports/subordinates", headers=auth_for(seed_org["employee"])
    )

    assert [r["username"] for r in mine.json()] == ["user1"]
    assert none.json() == []


def test_today_exists(client, seed_org, auth_for, create_report):
    headers = auth_for(seed_org["employee"])
    today = date.today()

    before = client.get("/api/daily-reports/today/exists", headers=headers)
    create_report(seed_org["employee"], report_date=today.isoformat())
    create_report(
        seed_org["peer"], report_date=(today - timedelta(days=1)).isoformat()
    )
    after = client.get("/api/daily-reports/today/exists", headers=headers)
    peer = client.get(
        "/api/daily-reports/today/exists", headers=auth_for(seed_org["peer"])
    )

    assert before.json() is False
    assert after.json() is True
    assert peer.json() is False
