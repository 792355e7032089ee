import pytest

from webcommon.schemas.common import BaseResult
from webcommon.services.notice import NoticeService


def test_root(client):
    assert client.get("/").json() == {"status": "ok"}


def test_health_db(client):
    body = client.get("/api/health/db").json()
    assert body["status"] == "ok"
    assert body["code"] == 200


def test_health_db_unreachable_is_failure_envelope(client):
    from main import app
    from sqlalchemy.exc import OperationalError
    from webcommon.database.session import get_db

    class _UnreachableSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = _UnreachableSession
    response = client.get("/api/health/db")
    assert response.status_code == 200
    assert response.json() == {
        "status": "error",
        "code": 500,
        "message": "operation failed",
        "data": None,
    }


# --------- list ----------


def test_list_notices_newest_first(client, notices):
    body = client.get("/api/notices", params={"page_size": 2}).json()
    assert body["status"] == "ok"
    assert body["message"] == "query succeeded"
    page = body["data"]
    assert [n["title"] for n in page["items"]] == ["Office closed", "New pricing"]
    assert page["total_items"] == 3
    assert page["total_pages"] == 2
    assert page["has_next"] is True


def test_list_notices_filters_by_bound_dates(client, notices):
    body = client.get(
        "/api/notices", params={"created_from": "2024/01/01", "created_to": "2024-01-31"}
    ).json()
    # date-only upper bound includes the whole day
    assert [n["title"] for n in body["data"]["items"]] == ["New pricing", "Maintenance window"]


def test_list_notices_mixed_aware_and_naive_bounds(client, notices):
    body = client.get(
        "/api/notices", params={"created_from": "2024-01-01T00:00:00Z", "created_to": "2024-02-01"}
    ).json()
    assert body["status"] == "ok"
    assert [n["title"] for n in body["data"]["items"]] == ["New pricing", "Maintenance window"]


def test_list_notices_aware_bounds_are_read_as_utc(client, notices):
    # 2024-01-31T20:00+02:00 is 18:00 UTC, before the 18:30 notice
    body = client.get(
        "/api/notices",
        params={"created_from": "2024-01-01", "created_to": "2024-01-31T20:00:00+02:00"},
    ).json()
    assert [n["title"] for n in body["data"]["items"]] == ["Maintenance window"]


def test_list_notices_aware_midnight_end_is_not_extended(client, notices):
    body = client.get(
        "/api/notices", params={"created_from": "2024-01-01", "created_to": "2024-01-31T00:00:00Z"}
    ).json()
    assert [n["title"] for n in body["data"]["items"]] == ["Maintenance window"]


def test_list_notices_mixed_bounds_reversed_is_bad_request(client, notices):
    response = client.get(
        "/api/notices", params={"created_from": "2024-02-01T00:00:00Z", "created_to": "2024-01-01"}
    )
    assert response.status_code == 400
    assert response.json()["code"] == 400


def test_list_notices_documents_date_parameters(client):
    operation = client.get("/openapi.json").json()["paths"]["/api/notices"]["get"]
    names = {p["name"] for p in operation["parameters"]}
    assert {"created_from", "created_to", "page", "page_size", "status"} <= names


def test_list_notices_filters_by_status(client, notices):
    body = client.get("/api/notices", params={"status": "closed"}).json()
    assert [n["title"] for n in body["data"]["items"]] == ["Office closed"]


def test_list_notices_empty_page_is_not_found(client, notices):
    response = client.get("/api/notices", params={"page": 5})
    assert response.status_code == 200
    assert response.json() == {
        "status": "error",
        "code": 404,
        "message": "query failed, result is empty.",
        "data": None,
    }


def test_list_notices_malformed_date_is_bad_request(client, notices):
    response = client.get("/api/notices", params={"created_from": "last tuesday"})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["code"] == 400
    assert "last tuesday" in body["message"]


def test_list_notices_reversed_range_is_bad_request(client, notices):
    response = client.get(
        "/api/notices", params={"created_from": "2024-02-01", "created_to": "2024-01-01"}
    )
    assert response.status_code == 400


# --------- single ----------


def test_get_notice(client, notices):
    body = client.get(f"/api/notices/{notices[0].id}").json()
    assert body["status"] == "ok"
    assert body["message"] == "query succeeded"
    assert body["data"]["title"] == "Maintenance window"
    assert body["data"]["created_at"] == "2024-01-05T09:00:00"


def test_get_missing_notice_is_not_found_envelope(client):
    body = client.get("/api/notices/999").json()
    assert body["code"] == 404
    assert body["message"] == "query failed, result is empty."


def test_get_notice_title_unwraps_envelope(client, notices):
    body = client.get(f"/api/notices/{notices[2].id}/title").json()
    assert body["status"] == "ok"
    assert body["data"] == "Office closed"


def test_get_missing_notice_title_is_empty_payload(client):
    response = client.get("/api/notices/999/title")
    assert response.status_code == 400
    assert response.json()["message"] == "supplied data is empty"


def test_get_notice_title_with_wrong_payload_type(client):
    from main import app

    class _WrongPayloadService:
        def fetch(self, notice_id):
            return BaseResult.ok({"title": "a dict, not a notice"})

    app.dependency_overrides[NoticeService] = _WrongPayloadService
    response = client.get("/api/notices/1/title")
    assert response.status_code == 500
    assert response.json()["message"] == "converted type does not match required type"


# --------- mutations ----------


def test_create_notice(client):
    response = client.post("/api/notices", json={"title": "Welcome", "status": "published"})
    body = response.json()
    assert body["status"] == "ok"
    assert body["data"]["id"] >= 1
    assert body["data"]["title"] == "Welcome"
    assert body["data"]["content"] is None


def test_create_notice_validation(client):
    response = client.post("/api/notices", json={"title": ""})
    assert response.status_code == 422


def test_update_notice_returns_row_count(client, notices):
    response = client.put(
        f"/api/notices/{notices[1].id}",
        json={"title": "New pricing (final)", "content": "From March", "status": "published"},
    )
    assert response.json() == {
        "status": "ok",
        "code": 200,
        "message": "operation succeeded",
        "data": 1,
    }
    assert client.get(f"/api/notices/{notices[1].id}").json()["data"]["status"] == "published"


def test_update_missing_notice_is_default_failure(client):
    body = client.put("/api/notices/999", json={"title": "Nothing"}).json()
    assert body["status"] == "error"
    assert body["code"] == 500
    assert body["message"] == "operation failed"


def test_delete_notice(client, notices):
    notice_id = notices[0].id
    body = client.delete(f"/api/notices/{notice_id}").json()
    assert body["status"] == "ok"
    assert body["data"] is None

    body = client.delete(f"/api/notices/{notice_id}").json()
    assert body["status"] == "error"
    assert body["code"] == 500


@pytest.mark.parametrize("path", ["/api/notices/0", "/api/notices/abc"])
def test_invalid_notice_id(client, path):
    assert client.get(path).status_code == 422


def test_repository_errors_hide_database_details(client):
    from main import app
    from webcommon.core.exceptions import RepositoryError

    class _BrokenService:
        def delete_one(self, notice_id):
            raise RepositoryError("connection reset by peer")

    app.dependency_overrides[NoticeService] = _BrokenService
    response = client.delete("/api/notices/1")
    assert response.status_code == 500
    assert response.json() == {
        "status": "error",
        "code": 500,
        "message": "An internal database error occurred",
        "data": None,
    }
