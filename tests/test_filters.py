import pytest

from app.exceptions import ValidationException
from app.models.profile import ProfileRole
from app.services import profiles, resources
from app.services.filters import RESOURCE_FILTERS, FieldKind, parse_bool, resource_predicates


@pytest.mark.parametrize("raw,expected", [("true", True), ("TRUE", True), ("1", True), ("yes", True),
                                          ("false", False), ("0", False), ("No", False)])
def test_parse_bool(raw, expected):
    assert parse_bool("assigned", raw) is expected


def test_parse_bool_rejects_other_values():
    with pytest.raises(ValidationException) as exc:
        parse_bool("assigned", "perhaps")
    assert exc.value.status_code == 400
    assert "assigned" in exc.value.detail


def test_boolean_and_id_fields_are_typed():
    assert RESOURCE_FILTERS["assigned"] is FieldKind.boolean
    assert RESOURCE_FILTERS["deductible_donation"] is FieldKind.boolean
    assert RESOURCE_FILTERS["resource_id"] is FieldKind.integer


def test_unknown_key_raises():
    with pytest.raises(ValidationException) as exc:
        resource_predicates({"created_at": "2021"})
    assert "created_at" in exc.value.detail


def test_integer_field_requires_integer():
    with pytest.raises(ValidationException):
        resource_predicates({"resource_id": "one"})


def test_filtered_subset_matches_every_key(db_session, make_resource):
    make_resource(resource_name="Dell Monitor", category="Displays", condition="Used")
    make_resource(resource_name="Dell Laptop", category="Computers", condition="Used")
    make_resource(resource_name="HP Laptop", category="Computers", condition="New")

    assert [r.resource_name for r in resources.find_all(db_session, {"resource_name": "dell"})] == [
        "Dell Monitor",
        "Dell Laptop",
    ]
    assert [r.resource_name for r in resources.find_all(db_session, {"resource_name": "LAPTOP", "condition": "used"})] == [
        "Dell Laptop",
    ]
    assert resources.find_all(db_session, {"category": "Furniture"}) == []
    assert len(resources.find_all(db_session, {})) == 3


def test_filter_by_id_and_nullable_text(db_session, make_resource, make_profile):
    mentee = make_profile(ProfileRole.mentee)
    first = make_resource()
    make_resource(assigned=True, current_assignee=mentee.profile_id)

    assert [r.resource_id for r in resources.find_all(db_session, {"resource_id": str(first.resource_id)})] == [first.resource_id]
    assigned = resources.find_all(db_session, {"current_assignee": mentee.profile_id})
    assert [r.current_assignee for r in assigned] == [mentee.profile_id]


def test_profile_role_filter_matches_enum_text(db_session, make_profile):
    make_profile(ProfileRole.mentor)
    make_profile(ProfileRole.mentee)
    make_profile(ProfileRole.super_admin)

    assert [p.role for p in profiles.find_all(db_session, {"role": "ADMIN"})] == [ProfileRole.super_admin]
    assert [p.role for p in profiles.find_all(db_session, {"is_active": "true", "role": "mentor"})] == [ProfileRole.mentor]
