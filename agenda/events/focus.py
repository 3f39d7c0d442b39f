"""Which view is on screen and which row is selected.

States are LIST (the table of upcoming events), DETAIL (the selected event)
and ALERT (a reminder popup). A fired reminder forces ALERT from any state;
every user command issued while the alert is up returns to LIST.

The selection is an index into the store's current ascending order, not a
handle on an event, so it has to be clamped after every store mutation.
"""

from enum import Enum


class Focus(Enum):
    LIST = "list"
    DETAIL = "detail"
    ALERT = "alert"


class FocusState:
    """Focus state machine plus the table selection cursor."""

    def __init__(self):
        self.view = Focus.LIST
        self.selected: int | None = None

    def select_next(self, count: int) -> None:
        if self._leave_alert() or self.view is not Focus.LIST or count == 0:
            return
        if self.selected is None or self.selected >= count - 1:
            self.selected = 0
        else:
            self.selected += 1

    def select_previous(self, count: int) -> None:
        if self._leave_alert() or self.view is not Focus.LIST or count == 0:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = count - 1
        else:
            self.selected = min(self.selected, count) - 1

    def enter_detail(self) -> None:
        if self._leave_alert():
            return
        self.view = Focus.DETAIL

    def back(self) -> None:
        self.view = Focus.LIST

    def toggle(self) -> None:
        """Enter key: open or close the detail view, or dismiss an alert."""
        if self.view is Focus.LIST:
            self.view = Focus.DETAIL
        else:
            self.view = Focus.LIST

    def dismiss(self) -> None:
        if self.view is Focus.ALERT:
            self.view = Focus.LIST

    def alert(self) -> None:
        self.view = Focus.ALERT

    def clamp(self, count: int) -> None:
        """Keep the selection inside ``[0, count)``, or None when empty."""
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        elif self.selected >= count:
            self.selected = count - 1

    def _leave_alert(self) -> bool:
        if self.view is Focus.ALERT:
            self.view = Focus.LIST
            return True
        return False
