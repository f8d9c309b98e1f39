from mazegame.websockets.validation import MOVE_INTENT, START_ROUND, TOGGLE_DEBUG, validate


def test_move_intent_normalises_direction():
    ok, data = validate({"dir": "  LEFT "}, MOVE_INTENT)
    assert ok
    assert data == {"dir": "left"}


def test_missing_required_field():
    ok, err = validate({}, MOVE_INTENT)
    assert not ok
    assert err == {"field": "dir", "error": "missing required field", "code": "required"}


def test_wrong_type_and_empty():
    ok, err = validate({"dir": 3}, MOVE_INTENT)
    assert not ok and err["code"] == "type"
    ok, err = validate({"dir": "   "}, MOVE_INTENT)
    assert not ok and err["code"] == "empty"
    ok, err = validate({"dir": "x" * 17}, MOVE_INTENT)
    assert not ok and err["code"] == "max_len"


def test_payload_must_be_object():
    ok, err = validate(["up"], MOVE_INTENT)
    assert not ok
    assert err["field"] == "__root__"


def test_optional_fields_and_empty_payload():
    assert validate(None, START_ROUND) == (True, {})
    assert validate({"difficulty": "Hard"}, START_ROUND) == (True, {"difficulty": "hard"})
    assert validate({}, TOGGLE_DEBUG) == (True, {})


def test_int_bounds_and_choices():
    schema = {"frames": ("int", True, {"min": 1, "max": 10}), "dir": ("str", False, {"choices": ("up", "down")})}
    assert validate({"frames": 3}, schema) == (True, {"frames": 3})
    assert validate({"frames": 0}, schema)[1]["code"] == "min"
    assert validate({"frames": 11}, schema)[1]["code"] == "max"
    assert validate({"frames": True}, schema)[1]["code"] == "type"
    assert validate({"frames": 2, "dir": "left"}, schema)[1]["code"] == "choices"


def test_bad_schema_reported():
    ok, err = validate({"a": 1}, {"a": ("float", True)})
    assert not ok and err["code"] == "schema"
