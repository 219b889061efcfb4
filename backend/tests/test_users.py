"""Tests for User read / update / delete endpoints."""
from tests.conftest import create_test_user, create_test_event


class TestUserReads:

    def test_list_users(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        create_test_user(client, "Bob", "Jones")
        resp = client.get("/api/user/", headers=headers)
        assert resp.status_code == 200
        names = [u["first_name"] for u in resp.json()["data"]]
        assert names == ["Alice", "Bob"]

    def test_get_user(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        resp = client.get(f"/api/user/{alice['id']}", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["email"] == alice["email"]

    def test_get_user_not_found(self, client):
        _, headers = create_test_user(client)
        resp = client.get("/api/user/9999", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == "User not found"

    def test_non_positive_id_rejected(self, client):
        _, headers = create_test_user(client)
        resp = client.get("/api/user/0", headers=headers)
        assert resp.status_code == 400

    def test_get_by_slug(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        resp = client.get("/api/user/slug/alice-smith", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == alice["id"]

    def test_get_by_unknown_slug(self, client):
        _, headers = create_test_user(client)
        resp = client.get("/api/user/slug/nobody", headers=headers)
        assert resp.status_code == 404


class TestUserUpdate:

    def test_update_keeps_slug(self, client):
        """Renaming does not regenerate the slug; profile URLs stay stable."""
        alice, headers = create_test_user(client, "Alice", "Smith")
        resp = client.put(f"/api/user/{alice['id']}", headers=headers, json={
            "first_name": "Alicia",
            "last_name": "Smythe",
            "email": "alicia@example.com",
        })
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["first_name"] == "Alicia"
        assert data["email"] == "alicia@example.com"
        assert data["slug"] == "alice-smith"

    def test_update_other_user_forbidden(self, client):
        _, headers = create_test_user(client, "Alice", "Smith")
        bob, _ = create_test_user(client, "Bob", "Jones")
        resp = client.put(f"/api/user/{bob['id']}", headers=headers, json={
            "first_name": "Hacked",
            "last_name": "Name",
            "email": "hacked@example.com",
        })
        assert resp.status_code == 403

    def test_update_to_taken_email(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        bob, _ = create_test_user(client, "Bob", "Jones")
        resp = client.put(f"/api/user/{alice['id']}", headers=headers, json={
            "first_name": "Alice",
            "last_name": "Smith",
            "email": bob["email"],
        })
        assert resp.status_code == 400


class TestUserDelete:

    def test_delete_self(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        bob, bob_headers = create_test_user(client, "Bob", "Jones")
        resp = client.delete(f"/api/user/{alice['id']}", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == alice["id"]

        resp = client.get(f"/api/user/{alice['id']}", headers=bob_headers)
        assert resp.status_code == 404

    def test_deleted_users_token_stops_working(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        client.delete(f"/api/user/{alice['id']}", headers=headers)
        resp = client.get("/api/user/", headers=headers)
        assert resp.status_code == 401


class TestUserEvents:

    def test_hosted_and_invited_events_listed_once(self, client):
        alice, alice_h = create_test_user(client, "Alice", "Smith")
        bob, bob_h = create_test_user(client, "Bob", "Jones")
        picnic = create_test_event(client, alice_h, title="Picnic", date="2030-06-01T12:00:00")
        party = create_test_event(client, bob_h, title="Party", date="2030-05-01T20:00:00")
        client.post(f"/api/event/{party['id']}/invite", headers=bob_h, json={"userId": alice["id"]})
        # Alice both hosts and is invited to her own picnic.
        client.post(f"/api/event/{picnic['id']}/invite", headers=alice_h, json={"userId": alice["id"]})

        resp = client.get(f"/api/user/{alice['id']}/events", headers=alice_h)
        assert resp.status_code == 200
        titles = [e["title"] for e in resp.json()["data"]]
        assert titles == ["Party", "Picnic"]

    def test_no_events_is_empty_list(self, client):
        alice, headers = create_test_user(client, "Alice", "Smith")
        resp = client.get(f"/api/user/{alice['id']}/events", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["data"] == []
