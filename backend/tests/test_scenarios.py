"""End-to-end moderation and RSVP scenarios."""
from tests.conftest import auth, create_test_event, create_test_user


def _ids(client, user):
    return [e["id"] for e in client.get("/api/events/", headers=auth(user)).json()]


def test_moderation_flow(client):
    admin = create_test_user(client, email="admin@example.com", role="ADMIN")
    organizer = create_test_user(client, email="org@example.com", role="ORGANIZER")
    attendee = create_test_user(client, email="att@example.com", role="ATTENDEE")

    e1 = create_test_event(client, admin, title="Launch", date="2031-03-01T09:00:00Z")
    assert e1["approved"] is True

    e2 = create_test_event(client, organizer, title="Workshop", date="2031-04-01T09:00:00Z")
    assert e2["approved"] is False
    assert e2["id"] not in _ids(client, attendee)
    assert e2["id"] in _ids(client, admin)

    resp = client.put(f"/api/events/{e2['id']}/approve", headers=auth(admin))
    assert resp.status_code == 200
    assert resp.json()["approved"] is True
    assert _ids(client, attendee) == [e1["id"], e2["id"]]


def test_rsvp_change_of_mind(client):
    admin = create_test_user(client, email="admin@example.com", role="ADMIN")
    attendee = create_test_user(client, email="att@example.com", role="ATTENDEE")
    e1 = create_test_event(client, admin, title="Launch")

    going = client.post(f"/api/events/{e1['id']}/rsvp", json={"status": "GOING"}, headers=auth(attendee))
    maybe = client.post(f"/api/events/{e1['id']}/rsvp", json={"status": "MAYBE"}, headers=auth(attendee))
    assert going.status_code == maybe.status_code == 200

    rsvps = client.get(f"/api/events/{e1['id']}/rsvps", headers=auth(attendee)).json()
    mine = [r for r in rsvps if r["user_id"] == attendee["user"]["id"]]
    assert len(mine) == 1
    assert mine[0]["status"] == "MAYBE"
