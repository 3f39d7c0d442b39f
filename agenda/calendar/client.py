"""Google Calendar API client and the startup credential gate.

The gate runs once, before anything is drawn. It either exchanges the
configured refresh token for an access token, or, when no refresh token is
set, opens a browser login and waits for the redirect on a local server.
Both paths run on a daemon thread under a hard deadline: if no credential
arrives in time the application does not start.
"""
import logging
import threading

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from agenda.core.channel import Channel, ChannelClosed
from agenda.core.config import Settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class AuthenticationError(RuntimeError):
    """No usable credential could be obtained at startup."""


def client_config(settings: Settings) -> dict:
    """OAuth client configuration for an installed (desktop) app."""
    return {
        "installed": {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": TOKEN_URI,
            "redirect_uris": ["http://localhost"],
        }
    }


def credentials_from_refresh_token(settings: Settings) -> Credentials:
    """Create credentials from the stored refresh token and fetch an access token."""
    credentials = Credentials(
        token=None,
        refresh_token=settings.google_refresh_token,
        token_uri=TOKEN_URI,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        scopes=SCOPES,
    )
    credentials.refresh(Request())
    logger.info("Refreshed Google API credentials")
    return credentials


def browser_login(settings: Settings) -> Credentials:
    """Run the browser login and wait for the local redirect."""
    flow = InstalledAppFlow.from_client_config(client_config(settings), SCOPES)
    return flow.run_local_server(
        port=settings.auth_port,
        open_browser=True,
        access_type="offline",
        prompt="consent",
        success_message="Successfully logged in! You can close your browser.",
    )


def login(settings: Settings) -> Credentials:
    if settings.google_refresh_token:
        return credentials_from_refresh_token(settings)
    logger.info("No GOOGLE_REFRESH_TOKEN configured, starting browser login")
    return browser_login(settings)


def acquire_credentials(settings: Settings, timeout: float | None = None, login=login) -> Credentials:
    """Obtain a credential within ``timeout`` seconds or raise AuthenticationError.

    The login runs on a daemon thread so an abandoned browser flow never
    keeps the process alive after the deadline.
    """
    timeout = settings.auth_timeout if timeout is None else timeout
    results: Channel[Credentials | Exception] = Channel("auth")

    def worker():
        try:
            result = login(settings)
        except Exception as e:
            result = e
        try:
            results.send(result)
        except ChannelClosed:
            logger.warning("Login completed after the deadline, ignored")

    threading.Thread(target=worker, name="auth", daemon=True).start()

    try:
        result = results.recv(timeout=timeout)
    except TimeoutError:
        raise AuthenticationError(f"Authentication timed out after {timeout:g}s") from None
    finally:
        results.close()

    if isinstance(result, Exception):
        raise AuthenticationError(f"Authentication failed: {result}") from result
    if not result or not result.token:
        raise AuthenticationError("Authentication returned no access token")
    return result


def get_calendar_service(credentials: Credentials):
    """Build authenticated Calendar API service."""
    return build("calendar", "v3", credentials=credentials, cache_discovery=False)
