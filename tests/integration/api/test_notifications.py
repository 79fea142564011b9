import pytest


pytestmark = pytest.mark.integration


def select(client, photo, gallery, client_identifier="c1"):
    return client.post("/api/v1/selections/toggle", json={
        "photo_id": str(photo.id),
        "gallery_id": str(gallery.id),
        "client_identifier": client_identifier,
    })


def test_notifications_follow_client_activity(client, gallery, photos, auth_headers):
    select(client, photos[0], gallery)
    client.post("/api/v1/selections/favorite", json={
        "photo_id": str(photos[1].id),
        "gallery_id": str(gallery.id),
        "client_identifier": "c1",
    })

    response = client.get("/api/v1/notifications", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["unreadCount"] == 2
    messages = {n["message"] for n in body["notifications"]}
    assert messages == {"Photo selected: IMG_0001.JPG", "Photo favorited: IMG_0002.JPG"}
    assert all(n["gallery_name"] == gallery.name for n in body["notifications"])


def test_mark_one_then_all_read(client, gallery, photos, auth_headers):
    for photo in photos:
        select(client, photo, gallery)
    notifications = client.get("/api/v1/notifications", headers=auth_headers).json()["notifications"]

    response = client.put(f"/api/v1/notifications/{notifications[0]['id']}/read", headers=auth_headers)
    assert response.status_code == 200
    assert client.get("/api/v1/notifications", headers=auth_headers).json()["unreadCount"] == 2

    response = client.put("/api/v1/notifications/read-all", headers=auth_headers)
    assert response.json() == {"message": "All notifications marked as read", "updated": 2}
    assert client.get("/api/v1/notifications", headers=auth_headers).json()["unreadCount"] == 0


def test_other_admin_cannot_read_notification(client, gallery, photos, auth_headers, other_auth_headers):
    select(client, photos[0], gallery)
    notification_id = client.get("/api/v1/notifications", headers=auth_headers).json()["notifications"][0]["id"]

    response = client.put(f"/api/v1/notifications/{notification_id}/read", headers=other_auth_headers)

    assert response.status_code == 404
    assert client.get("/api/v1/notifications", headers=other_auth_headers).json()["notifications"] == []


def test_dashboard_stats(client, gallery, photos, auth_headers):
    client.post("/api/v1/selections/select-all", json={"gallery_id": str(gallery.id), "client_identifier": "c1"})
    client.post("/api/v1/selections/favorite", json={
        "photo_id": str(photos[0].id),
        "gallery_id": str(gallery.id),
        "client_identifier": "c1",
    })

    response = client.get("/api/v1/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "total_galleries": 1,
        "total_photos": 3,
        "pending_selections": 3,
        "total_favorites": 1,
        "unread_notifications": 2,
    }


def test_gallery_stats(client, gallery, photos, auth_headers):
    client.post("/api/v1/selections/select-all", json={"gallery_id": str(gallery.id), "client_identifier": "c1"})
    selection_id = client.get(
        f"/api/v1/selections/gallery/{gallery.id}", headers=auth_headers
    ).json()["selections"][0]["id"]
    client.put(f"/api/v1/selections/{selection_id}/reject", headers=auth_headers)

    response = client.get(f"/api/v1/stats/gallery/{gallery.id}", headers=auth_headers)

    assert response.json() == {
        "gallery_id": str(gallery.id),
        "pending": 2,
        "approved": 0,
        "rejected": 1,
        "favorites": 0,
    }


def test_gallery_stats_foreign_gallery(client, gallery, other_auth_headers):
    response = client.get(f"/api/v1/stats/gallery/{gallery.id}", headers=other_auth_headers)

    assert response.status_code == 404


def test_out_of_range_limit_is_invalid_not_missing(client, auth_headers):
    response = client.get("/api/v1/notifications", params={"limit": 0}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid request fields", "fields": ["limit"]}
