#!/usr/bin/env python3
"""
One-time script to obtain a Google OAuth refresh token for agenda.

With a refresh token in .env (or config.toml) agenda starts without opening
a browser. Useful on machines where the browser login cannot reach the local
redirect server, e.g. over SSH.

Usage:
    python scripts/get_token.py [--client-id=XXX --client-secret=YYY]

Client id and secret default to GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET from
the agenda settings.
"""
import argparse
import os
import sys

from google_auth_oauthlib.flow import InstalledAppFlow

from agenda.calendar.client import SCOPES, client_config
from agenda.core.config import settings


def main():
    parser = argparse.ArgumentParser(description="Get Google OAuth refresh token")
    parser.add_argument("--client-id", default=settings.google_client_id, help="Google OAuth Client ID")
    parser.add_argument("--client-secret", default=settings.google_client_secret, help="Google OAuth Client Secret")
    args = parser.parse_args()

    if not args.client_id or not args.client_secret:
        print("Error: GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET are required.")
        print("Set them in .env or pass --client-id and --client-secret.")
        sys.exit(1)

    config = settings.model_copy(
        update={"google_client_id": args.client_id, "google_client_secret": args.client_secret}
    )
    flow = InstalledAppFlow.from_client_config(client_config(config), SCOPES)

    # Allow HTTP for localhost (required for manual copy-paste flow)
    os.environ["OAUTHLIB_INSECURE_TRANSPORT"] = "1"
    flow.redirect_uri = f"http://localhost:{settings.auth_port}/"

    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")

    print("Open this URL in a browser (on any machine):")
    print()
    print(auth_url)
    print()
    print("After authorizing you are redirected to a localhost URL that may not load.")
    redirect_response = input("Paste the full redirect URL here: ").strip()

    flow.fetch_token(authorization_response=redirect_response)

    print()
    print("Add the following to your .env file:")
    print()
    print(f"GOOGLE_REFRESH_TOKEN={flow.credentials.refresh_token}")


if __name__ == "__main__":
    main()
