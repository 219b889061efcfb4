"""Database-level checks: cascades, atomic event creation and seeding."""
import random
from datetime import datetime, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.errors import NotFoundError
from app.models.event import Event, EventHost
from app.models.friendship import Friendship
from app.models.invite import EventInvite
from app.models.user import User
from app.seed import DEFAULT_PASSWORD, seed_users
from app.services import event_service
from app.services.auth_service import verify_password
from tests.conftest import create_test_event, create_test_user


class TestCascades:

    def test_event_delete_removes_hosts_and_invites(self, client, db):
        host, host_h = create_test_user(client, "Ann", "Lee")
        guest, _ = create_test_user(client, "Ben", "Park")
        event = create_test_event(client, host_h)
        client.post(f"/api/event/{event['id']}/invite", headers=host_h, json={"userId": guest["id"]})
        client.post(f"/api/event/{event['id']}/host", headers=host_h, json={"userId": guest["id"]})

        assert db.query(EventHost).filter(EventHost.event_id == event["id"]).count() == 2
        assert db.query(EventInvite).filter(EventInvite.event_id == event["id"]).count() == 1

        assert client.delete(f"/api/event/{event['id']}", headers=host_h).status_code == 200
        assert db.query(EventHost).filter(EventHost.event_id == event["id"]).count() == 0
        assert db.query(EventInvite).filter(EventInvite.event_id == event["id"]).count() == 0

    def test_user_delete_removes_their_rows(self, client, db):
        host, host_h = create_test_user(client, "Ann", "Lee")
        guest, guest_h = create_test_user(client, "Ben", "Park")
        event = create_test_event(client, host_h)
        client.post(f"/api/event/{event['id']}/invite", headers=host_h, json={"userId": guest["id"]})
        client.post("/api/friends/friend-request", headers=guest_h,
                    json={"userId": guest["id"], "friendId": host["id"]})

        assert client.delete(f"/api/user/{guest['id']}", headers=guest_h).status_code == 200

        assert db.query(User).filter(User.id == guest["id"]).first() is None
        assert db.query(EventInvite).filter(EventInvite.user_id == guest["id"]).count() == 0
        assert db.query(Friendship).count() == 0
        # The host and their event are untouched.
        assert db.query(Event).filter(Event.id == event["id"]).count() == 1


class TestAtomicCreate:

    def test_created_event_has_exactly_one_host_row(self, client, db):
        host, host_h = create_test_user(client, "Ann", "Lee")
        event = create_test_event(client, host_h)
        hosts = db.query(EventHost).filter(EventHost.event_id == event["id"]).all()
        assert [h.user_id for h in hosts] == [host["id"]]

    def test_unknown_creator_leaves_no_event(self, db):
        with pytest.raises(NotFoundError):
            event_service.create_event(
                db, "Ghost party", None, datetime(2030, 1, 1, tzinfo=timezone.utc), None, creator_id=999,
            )
        assert db.query(Event).count() == 0
        assert db.query(EventHost).count() == 0


class TestSeed:

    def test_seed_creates_users_with_unique_slugs(self, db):
        users = seed_users(db, 3, rng=random.Random(7))
        assert len(users) == 3
        assert db.query(User).count() == 3
        slugs = [u.slug for u in users]
        assert len(set(slugs)) == 3
        assert all(verify_password(DEFAULT_PASSWORD, u.password) for u in users)

    def test_seeded_user_can_log_in(self, client, db):
        user = seed_users(db, 1, rng=random.Random(1))[0]
        resp = client.post("/api/auth/login", json={"email": user.email, "password": DEFAULT_PASSWORD})
        assert resp.status_code == 200


class TestStatusDomain:

    def test_unknown_friend_status_refused(self, client, db):
        a, _ = create_test_user(client, "Ann", "Lee")
        b, _ = create_test_user(client, "Ben", "Park")
        with pytest.raises(IntegrityError):
            db.execute(
                text("INSERT INTO friends (user_id, friend_id, status) VALUES (:a, :b, 'bogus')"),
                {"a": a["id"], "b": b["id"]},
            )
            db.commit()
        db.rollback()
        assert db.query(Friendship).count() == 0

    def test_unknown_invite_status_refused(self, client, db):
        host, host_h = create_test_user(client, "Ann", "Lee")
        guest, _ = create_test_user(client, "Ben", "Park")
        event = create_test_event(client, host_h)
        with pytest.raises(IntegrityError):
            db.execute(
                text("INSERT INTO event_invites (event_id, user_id, status) VALUES (:e, :u, 'going')"),
                {"e": event["id"], "u": guest["id"]},
            )
            db.commit()
        db.rollback()
        assert db.query(EventInvite).count() == 0
