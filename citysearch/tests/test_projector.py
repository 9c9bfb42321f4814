from citysearch.search.projector import project

RECORD = {"id": 1, "name": "London", "lat": 42.98, "population": 346765}


def test_empty_allow_list_keeps_everything():
    assert project(RECORD, []) == RECORD
    assert project(RECORD, []) is not RECORD


def test_keeps_only_allowed_attributes_in_allow_list_order():
    projected = project(RECORD, ["name", "id", "distance"])
    assert projected == {"name": "London", "id": 1}
    assert list(projected) == ["name", "id"]


def test_no_shared_attribute_omits_the_record():
    assert project(RECORD, ["distance", "score"]) is None


def test_projection_is_idempotent():
    allowed = ["id", "name", "score"]
    once = project(RECORD, allowed)
    assert project(once, allowed) == once
