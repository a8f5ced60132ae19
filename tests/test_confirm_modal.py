from cipanel.confirm_modal import ConfirmAction, ConfirmModal
from cipanel.keys import parse_key


def test_confirm_modal_creation():
    modal = ConfirmModal("Test message")
    assert modal.is_visible()
    assert modal.selected_button == 0
    assert modal.message == "Test message"


def test_confirm_modal_input():
    modal = ConfirmModal("Test")
    assert modal.handle_input(parse_key("y")) == ConfirmAction.YES
    assert modal.handle_input(parse_key("n")) == ConfirmAction.NO
    assert modal.handle_input(parse_key("enter")) == ConfirmAction.YES
    assert modal.handle_input(parse_key("esc")) == ConfirmAction.NO


def test_button_navigation():
    modal = ConfirmModal("Test")
    assert modal.selected_button == 0
    modal.handle_input(parse_key("right"))
    assert modal.selected_button == 1
    modal.handle_input(parse_key("left"))
    assert modal.selected_button == 0


def test_tab_moves_to_no_button():
    modal = ConfirmModal("Test")
    assert modal.handle_input(parse_key("tab")) == ConfirmAction.NONE
    assert modal.selected_button == 1


def test_other_keys_do_nothing():
    modal = ConfirmModal("Test")
    assert modal.handle_input(parse_key("x")) == ConfirmAction.NONE
    assert modal.handle_input(parse_key("Y")) == ConfirmAction.NONE
    assert modal.selected_button == 0


def test_hide():
    modal = ConfirmModal("Test")
    modal.hide()
    assert not modal.is_visible()