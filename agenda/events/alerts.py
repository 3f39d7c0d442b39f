"""Alert gate: turns fired reminders into a visible alert.

Reminders that fire close together are coalesced: every signal pending at
poll time is consumed by a single alert. Raising the alert also asks the
host terminal multiplexer to surface this pane; that call is best effort.
"""

import logging
import subprocess
from collections.abc import Sequence

from agenda.core.channel import Channel
from agenda.events.focus import FocusState

logger = logging.getLogger(__name__)

WINDOW_COMMAND_TIMEOUT = 5  # seconds


class AlertGate:
    """Consumes fire signals and raises the alert view."""

    def __init__(self, fired: Channel[str], window_command: Sequence[str] = ()):
        self.fired = fired
        self.window_command = list(window_command)
        self.alerted_ids: tuple[str, ...] = ()
        self.surface_error: str | None = None

    def poll_fired(self) -> bool:
        """Drain all pending fire signals. True if there was at least one."""
        drained = tuple(self.fired.drain())
        if not drained:
            return False
        if len(drained) > 1:
            logger.info(f"Coalesced {len(drained)} reminders into one alert")
        self.alerted_ids = drained
        return True

    def raise_alert(self, focus: FocusState) -> None:
        focus.alert()
        self.surface_error = self.surface()

    def surface(self) -> str | None:
        """Run the window command. Returns an error message on failure."""
        if not self.window_command:
            return None
        try:
            subprocess.run(
                self.window_command,
                check=True,
                capture_output=True,
                timeout=WINDOW_COMMAND_TIMEOUT,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Could not surface terminal with {' '.join(self.window_command)!r}: {e}")
            return str(e)
        return None
