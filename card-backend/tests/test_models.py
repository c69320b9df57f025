import pytest
from pydantic import ValidationError

from cardlib.errors import BadRequest
from cardlib.models import CardRequest, coerce_flag, display_text, parse_card_request


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        (None, False),
        (0, False),
        (1, True),
        ("", False),
        ("false", True),
        ("0", True),
        ("off", True),
        ("true", True),
        (0.0, False),
        (float("nan"), False),
        (-2.5, True),
        ([], True),
        ({}, True),
        ({"a": 1}, True),
    ],
)
def test_coerce_flag(value, expected):
    assert coerce_flag(value) is expected


def test_parse_card_request():
    req = parse_card_request({"userName": "Alice", "isClubMember": "true", "extra": 1})
    assert req == CardRequest(display_name="Alice", is_member=True)


@pytest.mark.parametrize(
    "user_name, expected",
    [
        (42, "42"),
        (4.0, "4"),
        (1.5, "1.5"),
        (True, "true"),
        (["Al", "ice"], "Al,ice"),
        ({"a": 1}, "[object Object]"),
    ],
)
def test_parse_card_request_converts_non_string_names(user_name, expected):
    req = parse_card_request({"userName": user_name, "isClubMember": False})
    assert req.display_name == expected
    assert display_text(user_name) == expected


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "Alice",
        {"isClubMember": True},
        {"userName": "", "isClubMember": True},
        {"userName": None, "isClubMember": True},
        {"userName": False, "isClubMember": True},
        {"userName": 0, "isClubMember": True},
        {"userName": [], "isClubMember": True},
        {"userName": "Alice"},
    ],
)
def test_parse_card_request_rejects(payload):
    with pytest.raises(BadRequest) as excinfo:
        parse_card_request(payload)
    assert excinfo.value.message == "Missing parameters"
    assert excinfo.value.status_code == 400


def test_card_request_is_frozen_and_non_empty():
    req = CardRequest(display_name="A", is_member=False)
    with pytest.raises(ValidationError):
        req.display_name = "B"
    with pytest.raises(ValidationError):
        CardRequest(display_name="", is_member=False)
