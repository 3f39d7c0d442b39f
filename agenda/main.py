"""Agenda terminal application."""
import curses
import logging
import sys

from agenda.calendar.client import AuthenticationError, acquire_credentials, get_calendar_service
from agenda.calendar.sync import SnapshotSource
from agenda.core.channel import Channel
from agenda.core.config import Settings, settings
from agenda.core.scheduler import create_scheduler, shutdown_scheduler, start_refresh, start_timers
from agenda.events.alerts import AlertGate
from agenda.events.loop import Agenda
from agenda.events.reminders import ReminderScheduler
from agenda.models import EventCommand
from agenda.ui import theme, tui

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    """Log to a file; the terminal belongs to curses."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / "latest.log"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(log_file),
    )
    # The Google client logs every request at INFO
    logging.getLogger("googleapiclient.discovery").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def build_agenda(settings: Settings, commands: Channel[EventCommand], timers) -> Agenda:
    fired: Channel[str] = Channel("fired")
    return Agenda(
        commands=commands,
        reminders=ReminderScheduler(timers, fired, settings.lead_time),
        alerts=AlertGate(fired, settings.window_command),
        cancelled_as_remove=settings.cancelled_as_remove,
    )


def main():
    configure_logging(settings)
    logger.info(f"Starting {settings.app_name}")

    try:
        credentials = acquire_credentials(settings)
    except AuthenticationError as e:
        logger.error(f"Startup aborted: {e}")
        print(f"ERROR: Unsuccessful authentication: {e}", file=sys.stderr)
        sys.exit(1)

    commands: Channel[EventCommand] = Channel("commands")
    refresher = create_scheduler()
    timers = create_scheduler()
    agenda = build_agenda(settings, commands, timers)
    source = SnapshotSource(
        get_calendar_service(credentials),
        commands,
        calendar_id=settings.google_calendar_id,
        window=settings.visible_window,
    )

    start_timers(timers)
    start_refresh(refresher, source.refresh, settings.refresh_period_seconds)
    try:
        curses.wrapper(tui.run, agenda, theme.PALETTES[settings.theme])
    except KeyboardInterrupt:
        pass
    finally:
        commands.close()
        agenda.alerts.fired.close()
        shutdown_scheduler(refresher)
        shutdown_scheduler(timers)
        logger.info(f"{settings.app_name} shut down")


if __name__ == "__main__":
    main()
