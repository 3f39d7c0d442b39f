"""Curses front end: the events table, the detail view and the alert popup.

The loop below is the application's foreground thread. Every pass it draws
the current state, waits up to ``TICK_MS`` for a key, maps the key to a
focus command, then lets ``Agenda.tick`` fold in calendar updates, fired
reminders and expiry.
"""
import curses

from agenda.events.focus import Focus
from agenda.events.loop import Agenda
from agenda.models import CalendarEvent
from agenda.ui import theme

TICK_MS = 50  # ~20 Hz
FOOTER = "open/close: l/h/enter | move: k/j | quit: q"


# Text layout (no curses needed)

def format_row(event: CalendarEvent) -> tuple[str, str, str]:
    """Subject, local start and duration columns for the events table."""
    start = event.start_time.astimezone()
    minutes = int(event.duration.total_seconds() // 60)
    return (
        event.subject,
        f"{start:%a %Y-%m-%d} @ {start:%H:%M}",
        f"{minutes} mins",
    )


def detail_lines(event: CalendarEvent) -> list[str]:
    start = event.start_time.astimezone()
    end = event.end_time.astimezone()
    lines = [
        event.subject,
        f"{start:%a %Y-%m-%d %H:%M} - {end:%H:%M}",
        f"Location:  {event.location or '-'}",
        f"Organizer: {event.organizer or '-'}",
    ]
    if event.online_meeting:
        lines.append(f"Join:      {event.online_meeting.join_url}")
    if event.response:
        lines.append(f"Response:  {event.response.name.replace('_', ' ').title()}")
    if event.is_cancelled:
        lines.append("CANCELLED")
    if event.body:
        lines.append("")
        lines.extend(event.body.splitlines())
    return lines


def alert_lines(events: list[CalendarEvent]) -> list[str]:
    if not events:
        return ["Upcoming event"]
    lines = []
    for event in events:
        start = event.start_time.astimezone()
        lines.append(f"{start:%H:%M}  {event.subject}")
        if event.organizer:
            lines.append(f"       {event.organizer}")
        if event.online_meeting:
            lines.append(f"       {event.online_meeting.join_url}")
    return lines


def _clip(text: str, width: int) -> str:
    return text[: max(width, 0)]


def handle_key(agenda: Agenda, key: int) -> bool:
    """Apply a key press to the focus state. Returns False on quit."""
    focus = agenda.focus
    count = len(agenda.store)

    if key == ord("q"):
        return False
    if focus.view is Focus.ALERT and key != -1:
        focus.dismiss()
    elif key in (ord("j"), curses.KEY_DOWN):
        focus.select_next(count)
    elif key in (ord("k"), curses.KEY_UP):
        focus.select_previous(count)
    elif key == ord("l"):
        focus.enter_detail()
    elif key in (ord("h"), 27):  # 27: Esc
        focus.back()
    elif key in (ord("\n"), curses.KEY_ENTER):
        focus.toggle()
    return True


class AgendaTUI:
    """Draws an Agenda on a curses screen."""

    def __init__(self, stdscr, agenda: Agenda, palette: theme.Palette):
        self.stdscr = stdscr
        self.agenda = agenda
        theme.init_colors(palette)
        curses.curs_set(0)
        stdscr.timeout(TICK_MS)
        stdscr.keypad(True)

    def run(self):
        while True:
            self.draw()
            key = self.stdscr.getch()
            if not handle_key(self.agenda, key):
                return
            self.agenda.tick()

    def draw(self):
        self.stdscr.erase()
        try:
            view = self.agenda.view
            if view is Focus.ALERT:
                self.draw_alert()
            elif view is Focus.DETAIL:
                self.draw_detail()
            else:
                self.draw_table()
        except curses.error:
            # Terminal too small for the layout
            pass
        self.stdscr.refresh()

    def draw_table(self):
        height, width = self.stdscr.getmaxyx()
        subject_w = max(width - 40, 10)
        header = f" {'Event':<{subject_w}} {'Start Time':<25} {'Duration':<10}"
        self.stdscr.addstr(0, 0, _clip(header.ljust(width), width - 1), curses.color_pair(theme.HEADER) | curses.A_BOLD)

        events = self.agenda.events
        if not events:
            self.stdscr.addstr(2, 1, _clip("No upcoming events", width - 2), curses.A_DIM)

        for i, event in enumerate(events[: max(height - 3, 0)]):
            subject, start, duration = format_row(event)
            line = f" {subject[:subject_w]:<{subject_w}} {start:<25} {duration:<10}"
            if i == self.agenda.selected:
                attr = curses.color_pair(theme.SELECTED) | curses.A_BOLD
            else:
                attr = curses.color_pair(theme.ROW if i % 2 == 0 else theme.ALT_ROW)
            self.stdscr.addstr(i + 1, 0, _clip(line.ljust(width), width - 1), attr)

        self.stdscr.addstr(height - 1, 0, _clip(FOOTER.center(width), width - 1), curses.A_DIM)

    def draw_detail(self):
        event = self.agenda.selected_event
        lines = detail_lines(event) if event is not None else ["No event selected"]
        self._draw_box("Event", lines, curses.color_pair(theme.DETAIL))

    def draw_alert(self):
        height, width = self.stdscr.getmaxyx()
        background = curses.color_pair(theme.ALERT)
        for y in range(height - 1):
            self.stdscr.addstr(y, 0, " " * (width - 1), background)
        lines = alert_lines(self.agenda.alert_events)
        error = self.agenda.alerts.surface_error
        if error:
            lines += ["", f"(could not surface pane: {error})"]
        lines += ["", "press any key"]
        self._draw_box("Starting soon", lines, background | curses.A_BOLD)

    def _draw_box(self, title: str, lines: list[str], attr: int):
        height, width = self.stdscr.getmaxyx()
        box_w = max(min(width - 4, max((len(line) for line in lines), default=0) + 4, 100), 20)
        box_h = min(len(lines) + 2, height - 2)
        top = max((height - box_h) // 2, 0)
        left = max((width - box_w) // 2, 0)

        win = self.stdscr.derwin(box_h, box_w, top, left)
        win.bkgd(" ", attr)
        win.erase()
        win.box()
        win.addstr(0, 2, _clip(f" {title} ", box_w - 4))
        for i, line in enumerate(lines[: box_h - 2]):
            win.addstr(i + 1, 2, _clip(line, box_w - 4))


def run(stdscr, agenda: Agenda, palette: theme.Palette):
    """Entry point for curses.wrapper."""
    AgendaTUI(stdscr, agenda, palette).run()
