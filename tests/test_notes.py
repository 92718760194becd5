from app.models.note import Note
from app.models.profile import ProfileRole
from app.services import notes


def _note_body(mentor_id, mentee_id, **overrides):
    body = {
        "content_type": "progress",
        "content": "Finished the first portfolio project.",
        "level": "2",
        "visible_to_admin": True,
        "visible_to_moderator": True,
        "visible_to_mentor": False,
        "profile_id_mentor": mentor_id,
        "profile_id_mentee": mentee_id,
    }
    body.update(overrides)
    return body


def test_create_and_fetch_note(client, mentor_headers, make_profile):
    mentor = make_profile(ProfileRole.mentor)
    mentee = make_profile(ProfileRole.mentee)

    resp = client.post("/notes", json=_note_body(mentor.profile_id, mentee.profile_id), headers=mentor_headers)
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["content_type"] == "progress"
    assert created["visible_to_moderator"] is True
    assert created["visible_to_mentor"] is False

    fetched = client.get(f"/notes/{created['note_id']}", headers=mentor_headers)
    assert fetched.status_code == 200
    assert fetched.json()["content"] == "Finished the first portfolio project."

    listed = client.get("/notes", headers=mentor_headers)
    assert [n["note_id"] for n in listed.json()] == [created["note_id"]]


def test_create_note_requires_content(client, mentor_headers, db_session):
    resp = client.post("/notes", json={"content_type": "progress"}, headers=mentor_headers)
    assert resp.status_code == 400
    assert "content" in resp.json()["message"]
    assert db_session.query(Note).count() == 0


def test_note_visibility_defaults(client, admin_headers):
    resp = client.post("/notes", json={"content_type": "general", "content": "hello"}, headers=admin_headers)
    assert resp.status_code == 201
    data = resp.json()
    assert data["visible_to_admin"] is True
    assert data["visible_to_moderator"] is False
    assert data["visible_to_mentor"] is False


def test_missing_note(client, mentor_headers):
    resp = client.get("/notes/77", headers=mentor_headers)
    assert resp.status_code == 404
    assert "77" in resp.json()["message"]


def test_notes_require_authentication(client):
    assert client.get("/notes").status_code == 401


def test_update_and_delete_are_not_implemented(client, mentor_headers):
    put = client.put("/notes/1", json={"content": "x"}, headers=mentor_headers)
    assert put.status_code == 501
    assert put.json()["message"] == "put by note_id not ready"

    delete = client.delete("/notes/1", headers=mentor_headers)
    assert delete.status_code == 501
    assert delete.json()["message"] == "delete by note_id not ready"


def test_note_service_update_and_remove(db_session):
    note = notes.create(db_session, {"content_type": "general", "content": "first draft"})
    note_id = note.note_id

    updated = notes.update(db_session, note_id, {"content": "revised", "visible_to_mentor": True})
    assert updated.content == "revised"
    assert updated.visible_to_mentor is True
    assert updated.content_type == "general"

    notes.remove(db_session, note_id)
    assert notes.find_by_id(db_session, note_id) is None
    assert notes.update(db_session, note_id, {"content": "gone"}) is None
