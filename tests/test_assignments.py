import pytest

from app.models.assignment import Assignment
from app.models.profile import ProfileRole
from app.services import assignments


@pytest.fixture
def pairing(db_session, make_profile):
    mentor = make_profile(ProfileRole.mentor, first_name="Frank", last_name="Martinez")
    other_mentor = make_profile(ProfileRole.mentor, first_name="Grace", last_name="Hopper")
    mentee = make_profile(ProfileRole.mentee, first_name="Cathy", last_name="Warmund")
    lonely = make_profile(ProfileRole.mentee, first_name="Lonely")
    rows = [
        Assignment(mentor_id=mentor.profile_id, mentee_id=mentee.profile_id),
        Assignment(mentor_id=other_mentor.profile_id, mentee_id=mentee.profile_id),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return {"mentor": mentor, "other_mentor": other_mentor, "mentee": mentee, "lonely": lonely, "rows": rows}


def test_find_all_groups_mentors_by_mentee(db_session, pairing):
    result = assignments.find_all(db_session)
    by_id = {m["profile_id"]: m for m in result}
    assert set(by_id) == {pairing["mentee"].profile_id, pairing["lonely"].profile_id}
    mentors = by_id[pairing["mentee"].profile_id]["mentors"]
    assert [m["first_name"] for m in mentors] == ["Frank", "Grace"]
    assert by_id[pairing["lonely"].profile_id]["mentors"] == []


def test_find_by_mentor_id_joins_mentee_profile(db_session, pairing):
    rows = assignments.find_by_mentor_id(db_session, pairing["mentor"].profile_id)
    assert len(rows) == 1
    row = rows[0]
    assert row["mentee_id"] == pairing["mentee"].profile_id
    assert row["first_name"] == "Cathy"
    assert row["role"] == ProfileRole.mentee
    assert "mentor_id" not in row


def test_find_by_mentee_id_joins_mentor_profiles(db_session, pairing):
    rows = assignments.find_by_mentee_id(db_session, pairing["mentee"].profile_id)
    assert [r["first_name"] for r in rows] == ["Frank", "Grace"]
    assert {r["mentor_id"] for r in rows} == {pairing["mentor"].profile_id, pairing["other_mentor"].profile_id}


def test_list_assignments_requires_moderator(client, mentor_headers, moderator_headers, pairing):
    assert client.get("/assignments", headers=mentor_headers).status_code == 403
    resp = client.get("/assignments", headers=moderator_headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_mentor_sees_own_mentees_only(client, mentor_headers, make_profile, db_session):
    mentee = make_profile(ProfileRole.mentee, first_name="Mine")
    client.get("/profile/current_user_profile", headers=mentor_headers)
    db_session.add(Assignment(mentor_id="mentor-1", mentee_id=mentee.profile_id))
    db_session.commit()

    own = client.get("/assignments/mentor/mentor-1", headers=mentor_headers)
    assert own.status_code == 200
    assert [r["first_name"] for r in own.json()] == ["Mine"]

    other = client.get("/assignments/mentor/someone-else", headers=mentor_headers)
    assert other.status_code == 403


def test_mentee_lookup_by_moderator(client, moderator_headers, pairing):
    resp = client.get(f"/assignments/mentee/{pairing['mentee'].profile_id}", headers=moderator_headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_get_assignment_and_missing(client, moderator_headers, pairing):
    row = pairing["rows"][0]
    resp = client.get(f"/assignments/{row.assignment_id}", headers=moderator_headers)
    assert resp.status_code == 200
    assert resp.json()["mentor_id"] == pairing["mentor"].profile_id

    missing = client.get("/assignments/9999", headers=moderator_headers)
    assert missing.status_code == 404
    assert "9999" in missing.json()["message"]


def test_create_assignment(client, admin_headers, make_profile):
    mentor = make_profile(ProfileRole.mentor)
    mentee = make_profile(ProfileRole.mentee)
    body = {"mentor_id": mentor.profile_id, "mentee_id": mentee.profile_id}

    resp = client.post("/assignments", json=body, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    assert resp.json()["assignment"]["mentee_id"] == mentee.profile_id

    duplicate = client.post("/assignments", json=body, headers=admin_headers)
    assert duplicate.status_code == 400


def test_create_assignment_unknown_profile(client, admin_headers, make_profile):
    mentor = make_profile(ProfileRole.mentor)
    resp = client.post("/assignments", json={"mentor_id": mentor.profile_id, "mentee_id": "ghost"}, headers=admin_headers)
    assert resp.status_code == 404
    assert "ghost" in resp.json()["message"]


def test_create_assignment_same_profile(client, admin_headers, make_profile):
    mentor = make_profile(ProfileRole.mentor)
    resp = client.post("/assignments", json={"mentor_id": mentor.profile_id, "mentee_id": mentor.profile_id}, headers=admin_headers)
    assert resp.status_code == 400


def test_create_assignment_requires_admin(client, moderator_headers, make_profile):
    mentor = make_profile(ProfileRole.mentor)
    mentee = make_profile(ProfileRole.mentee)
    resp = client.post("/assignments", json={"mentor_id": mentor.profile_id, "mentee_id": mentee.profile_id}, headers=moderator_headers)
    assert resp.status_code == 403


def test_update_assignment(client, admin_headers, pairing, make_profile):
    new_mentor = make_profile(ProfileRole.mentor)
    row = pairing["rows"][0]
    resp = client.put(f"/assignments/{row.assignment_id}", json={"mentor_id": new_mentor.profile_id}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["assignment"]["mentor_id"] == new_mentor.profile_id
    assert resp.json()["assignment"]["mentee_id"] == pairing["mentee"].profile_id


def test_delete_assignment_twice(client, admin_headers, pairing):
    row_id = pairing["rows"][0].assignment_id
    assert client.delete(f"/assignments/{row_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/assignments/{row_id}", headers=admin_headers).status_code == 404
