from concurrent.futures import ThreadPoolExecutor

import pytest

from app.api.deps import get_sequence_allocator
from app.main import app
from app.services.complaint_service import current_issue_date
from app.services.sequence_allocator import InMemorySequenceCounterStore, SequenceAllocator
from app.services.utils.receipt_number import receipt_date_key

API = "/api/v1"


@pytest.fixture
def body(applicant, complaint_type):
    return {
        "title": "Streetlight out on Main St",
        "content": "The light at the corner has been off for a week.",
        "contact_phone": "010-1234-5678",
        "type_id": complaint_type.id,
        "applicant_id": applicant.id,
    }


def submit(client, body) -> dict:
    response = client.post(f"{API}/complaints", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_submit_complaint(client, body):
    data = submit(client, body)
    assert data["receipt_number"] == f"CMP-{receipt_date_key(current_issue_date())}-0001"
    assert data["status"] == "RECEIVED"
    assert data["daily_sequence"] == 1

    fetched = client.get(f"{API}/complaints/receipt/{data['receipt_number']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == data["id"]


def test_submit_validation_errors(client, body):
    response = client.post(f"{API}/complaints", json={**body, "content": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"

    response = client.post(f"{API}/complaints", json={**body, "type_id": 9999})
    assert response.status_code == 404


def test_injected_allocator_is_used(client, body):
    store = InMemorySequenceCounterStore()
    app.dependency_overrides[get_sequence_allocator] = lambda: SequenceAllocator(store)

    submit(client, body)
    submit(client, body)
    assert store.current(current_issue_date()) == 2


def test_concurrent_submissions_get_unique_receipts(client, body):
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: submit(client, body), range(20)))

    sequences = sorted(r["daily_sequence"] for r in results)
    assert sequences == list(range(1, 21))
    assert len({r["receipt_number"] for r in results}) == 20


def test_status_workflow_over_http(client, body):
    complaint = submit(client, body)
    url = f"{API}/complaints/{complaint['id']}/status"

    response = client.post(url, json={"status": "IN_PROGRESS", "version": complaint["version"]})
    assert response.status_code == 200
    assert response.json()["status"] == "IN_PROGRESS"

    response = client.post(url, json={"status": "RECEIVED"})
    assert response.status_code == 409
    payload = response.json()
    assert payload["error"] == "INVALID_STATUS_TRANSITION"
    assert payload["details"] == {"current": "IN_PROGRESS", "requested": "RECEIVED"}

    # stale version
    response = client.post(url, json={"status": "RESOLVED", "version": complaint["version"]})
    assert response.status_code == 409
    assert response.json()["error"] == "CONCURRENT_UPDATE"


def test_unknown_status_is_a_request_error(client, body):
    complaint = submit(client, body)
    response = client.post(f"{API}/complaints/{complaint['id']}/status", json={"status": "ARCHIVED"})
    assert response.status_code == 422


def test_update_cannot_change_status(client, body):
    complaint = submit(client, body)
    response = client.put(
        f"{API}/complaints/{complaint['id']}",
        json={"title": "Updated", "status": "CLOSED"},
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Updated"
    assert response.json()["status"] == "RECEIVED"


def test_list_complaints(client, body):
    first = submit(client, body)
    submit(client, body)
    client.post(f"{API}/complaints/{first['id']}/status", json={"status": "REJECTED"})

    page = client.get(f"{API}/complaints", params={"status": "REJECTED"}).json()
    assert page["total"] == 1
    assert page["items"][0]["id"] == first["id"]

    page = client.get(f"{API}/complaints", params={"limit": 1}).json()
    assert page["total"] == 2
    assert len(page["items"]) == 1


def test_status_table(client):
    table = {row["status"]: row for row in client.get(f"{API}/complaints/statuses").json()}
    assert table["RECEIVED"]["next_statuses"] == ["IN_PROGRESS", "REJECTED"]
    assert table["CLOSED"]["next_statuses"] == []
    assert table["CLOSED"]["terminal"] is True
    assert not any(row["terminal"] for s, row in table.items() if s != "CLOSED")


def test_get_missing_and_malformed(client):
    response = client.get(f"{API}/complaints/9999")
    assert response.status_code == 404
    assert response.json()["statusCode"] == 404

    response = client.get(f"{API}/complaints/receipt/CMP-bad")
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_delete(client, body):
    complaint = submit(client, body)
    assert client.delete(f"{API}/complaints/{complaint['id']}").status_code == 204
    assert client.get(f"{API}/complaints/{complaint['id']}").status_code == 404

    started = submit(client, body)
    client.post(f"{API}/complaints/{started['id']}/status", json={"status": "IN_PROGRESS"})
    response = client.delete(f"{API}/complaints/{started['id']}")
    assert response.status_code == 409
    assert response.json()["error"] == "NOT_DELETABLE"
