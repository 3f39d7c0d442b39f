"""Tests for the focus state machine."""

import pytest

from agenda.events.focus import Focus, FocusState


@pytest.fixture(name="focus")
def focus_fixture() -> FocusState:
    return FocusState()


class TestSelection:
    def test_initial_state(self, focus: FocusState):
        assert focus.view is Focus.LIST
        assert focus.selected is None

    def test_next_wraps_to_first(self, focus: FocusState):
        focus.selected = 2
        focus.select_next(3)
        assert focus.selected == 0

    def test_previous_wraps_to_last(self, focus: FocusState):
        focus.selected = 0
        focus.select_previous(3)
        assert focus.selected == 2

    def test_step_through(self, focus: FocusState):
        focus.clamp(3)
        assert focus.selected == 0
        focus.select_next(3)
        focus.select_next(3)
        assert focus.selected == 2
        focus.select_previous(3)
        assert focus.selected == 1

    def test_empty_is_noop(self, focus: FocusState):
        focus.select_next(0)
        assert focus.selected is None
        focus.select_previous(0)
        assert focus.selected is None

    def test_first_move_selects_first_row(self, focus: FocusState):
        focus.select_next(3)
        assert focus.selected == 0

    def test_navigation_ignored_in_detail(self, focus: FocusState):
        focus.selected = 1
        focus.enter_detail()
        focus.select_next(3)
        assert focus.selected == 1
        assert focus.view is Focus.DETAIL


class TestClamp:
    def test_clamp_to_shrunk_store(self, focus: FocusState):
        focus.selected = 4
        focus.clamp(2)
        assert focus.selected == 1

    def test_clamp_empty(self, focus: FocusState):
        focus.selected = 0
        focus.clamp(0)
        assert focus.selected is None

    def test_clamp_keeps_valid_index(self, focus: FocusState):
        focus.selected = 1
        focus.clamp(3)
        assert focus.selected == 1


class TestViews:
    def test_detail_and_back(self, focus: FocusState):
        focus.selected = 1
        focus.enter_detail()
        assert focus.view is Focus.DETAIL
        assert focus.selected == 1

        focus.back()
        assert focus.view is Focus.LIST

    def test_toggle(self, focus: FocusState):
        focus.toggle()
        assert focus.view is Focus.DETAIL
        focus.toggle()
        assert focus.view is Focus.LIST

    @pytest.mark.parametrize("start", [Focus.LIST, Focus.DETAIL, Focus.ALERT])
    def test_alert_overrides_any_view(self, focus: FocusState, start: Focus):
        focus.view = start
        focus.alert()
        assert focus.view is Focus.ALERT

    @pytest.mark.parametrize(
        "command",
        [
            lambda f: f.dismiss(),
            lambda f: f.back(),
            lambda f: f.enter_detail(),
            lambda f: f.toggle(),
            lambda f: f.select_next(3),
            lambda f: f.select_previous(3),
        ],
    )
    def test_any_command_leaves_alert(self, focus: FocusState, command):
        focus.selected = 1
        focus.alert()

        command(focus)

        assert focus.view is Focus.LIST
        assert focus.selected == 1

    def test_dismiss_outside_alert_is_noop(self, focus: FocusState):
        focus.enter_detail()
        focus.dismiss()
        assert focus.view is Focus.DETAIL
