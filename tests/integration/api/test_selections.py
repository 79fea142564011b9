import pytest
from uuid import uuid4

from src.models import Selection, SelectionStatus


pytestmark = pytest.mark.integration

API = "/api/v1/selections"


def toggle(client, photo, gallery, client_identifier="c1"):
    return client.post(f"{API}/toggle", json={
        "photo_id": str(photo.id),
        "gallery_id": str(gallery.id),
        "client_identifier": client_identifier,
    })


def test_health_endpoint(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_select_approve_then_toggle_off(client, gallery, photos, auth_headers):
    """Client picks a photo, admin approves it, client toggles it off again."""
    response = toggle(client, photos[0], gallery)
    assert response.status_code == 200
    assert response.json() == {"selected": True, "totalSelected": 1, "message": "Photo selected"}

    listing = client.get(f"{API}/gallery/{gallery.id}", headers=auth_headers).json()
    selection_id = listing["selections"][0]["id"]

    response = client.put(f"{API}/{selection_id}/approve", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Selection approved"}

    listing = client.get(f"{API}/gallery/{gallery.id}", headers=auth_headers).json()
    assert listing["total"] == 1
    assert listing["selections"][0]["status"] == "approved"
    assert listing["grouped_by_client"]["c1"][0]["photo_id"] == str(photos[0].id)

    response = toggle(client, photos[0], gallery)
    assert response.json() == {"selected": False, "totalSelected": 0, "message": "Photo deselected"}

    listing = client.get(f"{API}/gallery/{gallery.id}", headers=auth_headers).json()
    assert listing["total"] == 0


def test_toggle_missing_field(client, gallery, read_session):
    response = client.post(f"{API}/toggle", json={"gallery_id": str(gallery.id), "client_identifier": "c1"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"
    with read_session() as db:
        assert db.query(Selection).count() == 0


def test_toggle_malformed_id(client, gallery):
    response = client.post(f"{API}/toggle", json={
        "photo_id": "not-a-uuid",
        "gallery_id": str(gallery.id),
        "client_identifier": "c1",
    })

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid request fields", "fields": ["photo_id"]}


def test_toggle_unknown_photo(client, gallery):
    response = client.post(f"{API}/toggle", json={
        "photo_id": str(uuid4()),
        "gallery_id": str(gallery.id),
        "client_identifier": "c1",
    })

    assert response.status_code == 404
    assert response.json() == {"detail": "Photo not found"}


def test_select_all_and_deselect_all(client, gallery, photos):
    toggle(client, photos[0], gallery)

    response = client.post(f"{API}/select-all", json={"gallery_id": str(gallery.id), "client_identifier": "c1"})
    assert response.status_code == 200
    assert response.json() == {"totalSelected": 3, "message": "All photos selected"}

    response = client.post(f"{API}/deselect-all", json={"gallery_id": str(gallery.id), "client_identifier": "c1"})
    assert response.json() == {"totalSelected": 0, "message": "All photos deselected"}


def test_select_all_missing_client(client, gallery):
    response = client.post(f"{API}/select-all", json={"gallery_id": str(gallery.id)})

    assert response.status_code == 400


def test_client_lists_own_selections(client, gallery, photos):
    toggle(client, photos[0], gallery, "c1")
    toggle(client, photos[1], gallery, "c2")

    response = client.get(API, params={"gallery_id": str(gallery.id), "client_identifier": "c1"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["selections"][0]["original_name"] == "IMG_0001.JPG"
    assert body["selections"][0]["status"] == "pending"


def test_client_list_requires_identifier(client, gallery):
    response = client.get(API, params={"gallery_id": str(gallery.id)})

    assert response.status_code == 400


def test_favorite_toggle_and_list(client, gallery, photos):
    body = {"photo_id": str(photos[1].id), "gallery_id": str(gallery.id), "client_identifier": "c1"}

    response = client.post(f"{API}/favorite", json=body)
    assert response.json() == {"favorited": True, "message": "Added to favorites"}

    favorites = client.get(f"{API}/favorites", params={"gallery_id": str(gallery.id), "client_identifier": "c1"})
    assert favorites.json()["count"] == 1
    assert favorites.json()["favorites"][0]["photo_id"] == str(photos[1].id)

    response = client.post(f"{API}/favorite", json=body)
    assert response.json() == {"favorited": False, "message": "Removed from favorites"}


class TestAdminAccess:

    def test_requires_token(self, client, gallery):
        response = client.get(f"{API}/gallery/{gallery.id}")

        assert response.status_code in (401, 403)

    def test_rejects_bad_token(self, client, gallery):
        response = client.get(f"{API}/gallery/{gallery.id}", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401

    def test_rejects_non_admin(self, client, gallery, client_user):
        from src.core.security import create_access_token

        token = create_access_token({"sub": str(client_user.id)})
        response = client.get(f"{API}/gallery/{gallery.id}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_foreign_gallery_is_not_found(self, client, gallery, other_auth_headers):
        response = client.get(f"{API}/gallery/{gallery.id}", headers=other_auth_headers)

        assert response.status_code == 404

    def test_foreign_selection_cannot_be_reviewed(self, client, gallery, photos, auth_headers, other_auth_headers):
        toggle(client, photos[0], gallery)
        selection_id = client.get(f"{API}/gallery/{gallery.id}", headers=auth_headers).json()["selections"][0]["id"]

        response = client.put(f"{API}/{selection_id}/reject", headers=other_auth_headers)

        assert response.status_code == 404
        assert response.json() == {"detail": "Selection not found"}


class TestBulkReview:

    def test_bulk_approve(self, client, gallery, photos, auth_headers, read_session):
        client.post(f"{API}/select-all", json={"gallery_id": str(gallery.id), "client_identifier": "c1"})
        ids = [s["id"] for s in client.get(f"{API}/gallery/{gallery.id}", headers=auth_headers).json()["selections"]]

        response = client.post(f"{API}/bulk-approve", json={"selection_ids": ids[:2]}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "2 selections approved", "updated": 2}
        with read_session() as db:
            assert db.query(Selection).filter_by(status=SelectionStatus.approved).count() == 2

    def test_bulk_reject_empty_list(self, client, auth_headers):
        response = client.post(f"{API}/bulk-reject", json={"selection_ids": []}, headers=auth_headers)

        assert response.status_code == 400

    def test_bulk_with_foreign_selection_is_all_or_nothing(
        self, client, gallery, photos, foreign_gallery, auth_headers, read_session
    ):
        foreign, foreign_photos = foreign_gallery
        toggle(client, photos[0], gallery)
        toggle(client, foreign_photos[0], foreign, "c9")
        with read_session() as db:
            ids = [str(s.id) for s in db.query(Selection).all()]

        response = client.post(f"{API}/bulk-approve", json={"selection_ids": ids}, headers=auth_headers)

        assert response.status_code == 404
        with read_session() as db:
            assert db.query(Selection).filter_by(status=SelectionStatus.approved).count() == 0
