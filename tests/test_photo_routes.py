import base64

import pytest
from conftest import ALPHA, BETA, OPERATOR


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode()


def _upload_payload(file_name="final.jpg"):
    return {
        "imageData": _encode(b"full-size"),
        "thumbnailData": _encode(b"thumb"),
        "fileName": file_name,
    }


@pytest.fixture
def in_progress(client):
    for path, headers in (("send", OPERATOR), ("start", ALPHA)):
        assert client.post(f"/api/tickets/1/{path}", headers=headers).status_code == 200
    return "1"


def test_upload_attaches_photo_and_writes_files(client, settings, in_progress):
    response = client.post(
        f"/api/tickets/{in_progress}/photos", json=_upload_payload("Final Shot.JPG"), headers=ALPHA
    )

    assert response.status_code == 201
    photo = response.json()
    assert photo["id"] == "upload-1-1"
    assert photo["label"] == "Final Shot.JPG"
    assert photo["imageUrl"] == "/api/assets/uploads/1/upload-1-1.jpg"
    assert (settings.uploads_path / "1" / "upload-1-1.jpg").read_bytes() == b"full-size"
    assert (settings.uploads_path / "1" / "thumbnails" / "upload-1-1.jpg").read_bytes() == b"thumb"

    ticket = client.get("/api/tickets/1", headers=ALPHA).json()
    assert [item["id"] for item in ticket["partnerPhotos"]] == ["upload-1-1"]
    assert ticket["history"][-1]["field"] == "partnerPhotos"
    assert ticket["history"][-1]["oldValue"] == "(none)"
    assert ticket["history"][-1]["newValue"] == "Final Shot.JPG"

    served = client.get(photo["thumbnailUrl"])
    assert served.status_code == 200
    assert served.content == b"thumb"


def test_upload_rejects_unsupported_type(client, in_progress):
    response = client.post(
        f"/api/tickets/{in_progress}/photos", json=_upload_payload("clip.gif"), headers=ALPHA
    )

    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["detail"]
    assert client.get("/api/tickets/1", headers=ALPHA).json()["partnerPhotos"] == []


def test_upload_rejects_invalid_base64(client, in_progress):
    payload = _upload_payload()
    payload["imageData"] = "not base64!"

    response = client.post(f"/api/tickets/{in_progress}/photos", json=payload, headers=ALPHA)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid payload"


def test_upload_requires_in_progress_ticket(client):
    client.post("/api/tickets/1/send", headers=OPERATOR)

    response = client.post("/api/tickets/1/photos", json=_upload_payload(), headers=ALPHA)

    assert response.status_code == 409
    assert response.json()["detail"] == "Photos can only be managed when ticket is In Progress"


def test_upload_is_limited_to_owning_partner(client, in_progress):
    other = client.post(f"/api/tickets/{in_progress}/photos", json=_upload_payload(), headers=BETA)
    staff = client.post(f"/api/tickets/{in_progress}/photos", json=_upload_payload(), headers=OPERATOR)
    missing = client.post("/api/tickets/99/photos", json=_upload_payload(), headers=ALPHA)

    assert other.status_code == 404
    assert staff.status_code == 403
    assert missing.status_code == 404


def test_delete_photo_removes_files_and_metadata(client, settings, in_progress):
    photo = client.post(
        f"/api/tickets/{in_progress}/photos", json=_upload_payload(), headers=ALPHA
    ).json()

    response = client.delete(f"/api/tickets/{in_progress}/photos/{photo['id']}", headers=ALPHA)

    assert response.status_code == 204
    assert not (settings.uploads_path / "1" / photo["fileName"]).exists()
    assert not (settings.uploads_path / "1" / "thumbnails" / photo["fileName"]).exists()
    ticket = client.get("/api/tickets/1", headers=ALPHA).json()
    assert ticket["partnerPhotos"] == []
    assert ticket["history"][-1]["newValue"] == "(none)"


def test_delete_unknown_photo(client, in_progress):
    response = client.delete(f"/api/tickets/{in_progress}/photos/upload-1-9", headers=ALPHA)

    assert response.status_code == 404
    assert response.json()["detail"] == "Photo not found on this ticket"
