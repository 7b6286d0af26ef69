API = "/api/v1/complaint-types"


def test_create_and_list_types(client):
    response = client.post(API, json={"name": "Noise", "description": "Night-time noise"})
    assert response.status_code == 201
    assert response.json()["is_active"] is True

    client.post(API, json={"name": "Illegal parking"})
    names = [t["name"] for t in client.get(API).json()]
    assert names == ["Illegal parking", "Noise"]


def test_duplicate_name_is_rejected(client):
    client.post(API, json={"name": "Noise"})
    response = client.post(API, json={"name": "Noise"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_update_type(client):
    created = client.post(API, json={"name": "Noise"}).json()
    response = client.put(f"{API}/{created['id']}", json={"description": "Construction noise"})
    assert response.status_code == 200
    assert response.json()["description"] == "Construction noise"
    assert client.put(f"{API}/9999", json={"name": "x"}).status_code == 404


def test_deactivated_type_cannot_receive_complaints(client, applicant):
    created = client.post(API, json={"name": "Noise"}).json()
    response = client.delete(f"{API}/{created['id']}")
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert client.get(API, params={"active_only": True}).json() == []

    response = client.post("/api/v1/complaints", json={
        "title": "Barking dog",
        "content": "Every night after 11pm.",
        "contact_phone": "010-0000-0000",
        "type_id": created["id"],
        "applicant_id": applicant.id,
    })
    assert response.status_code == 404
