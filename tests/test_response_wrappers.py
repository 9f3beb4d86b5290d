import pytest

from src.integrations.errors import UnexpectedResponse
from src.integrations.policy.response_wrappers import (
    GENERIC_BOARD_ERROR,
    extract_error_message,
    interpret_board_item_response,
    normalize_contact_response,
    normalize_segments_response,
)


def test_created_id_wins_over_errors():
    result = interpret_board_item_response(
        {"data": {"create_item": {"id": 42, "name": "Jane"}}, "errors": [{"message": "late warning"}]},
        {"text__1": "Acme"},
    )

    assert result.success is True
    assert result.item_id == "42"
    assert result.warnings == ["late warning"]
    assert result.attempted_payload == {"text__1": "Acme"}


def test_errors_without_item_is_failure():
    result = interpret_board_item_response({"errors": [{"message": "Column not found"}]}, {})

    assert result.success is False
    assert result.item_id is None
    assert result.error_message == "Column not found"


def test_errors_without_message_fall_back_to_generic():
    result = interpret_board_item_response({"data": None, "errors": [{}]}, {})

    assert result.error_message == GENERIC_BOARD_ERROR


@pytest.mark.parametrize("raw", [{}, {"data": {}}, {"data": {"create_item": {"id": ""}}}, ["not", "a", "dict"]])
def test_neither_item_nor_errors_is_unexpected(raw):
    with pytest.raises(UnexpectedResponse):
        interpret_board_item_response(raw, {})


def test_extract_error_message_shapes():
    assert extract_error_message({"errors": [{"message": "a"}]}) == "a"
    assert extract_error_message({"error_message": "b"}) == "b"
    assert extract_error_message({"message": "c"}) == "c"
    assert extract_error_message({"error": "d"}) == "d"
    assert extract_error_message({"error": {"nested": True}}, default="x") == "x"
    assert extract_error_message("plain text", default="y") == "y"


def test_segments_require_data_list():
    with pytest.raises(UnexpectedResponse):
        normalize_segments_response({"object": "list"})


def test_contact_response_requires_id():
    assert normalize_contact_response({"id": "c_1"}) == "c_1"
    with pytest.raises(UnexpectedResponse):
        normalize_contact_response({"object": "contact"})
