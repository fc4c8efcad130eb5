from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow, InstalledAppFlow

from .config import SCOPES, Settings
from .errors import AuthFailure


def load_credentials(token_file: str) -> Optional[Credentials]:
    if not token_file or not Path(token_file).exists():
        return None
    try:
        return Credentials.from_authorized_user_file(token_file, SCOPES)
    except (OSError, ValueError) as exc:
        logging.warning("Ignoring unreadable token file %s: %s", token_file, exc)
        return None


def save_credentials(creds: Credentials, client_secrets_file: str, token_file: str) -> None:
    if not creds.refresh_token:
        logging.warning("Provider returned no refresh token; %s not written", token_file)
        return
    with open(client_secrets_file) as fh:
        keys = json.load(fh)
    key = keys.get("installed") or keys.get("web")
    payload = {
        "type": "authorized_user",
        "client_id": key["client_id"],
        "client_secret": key["client_secret"],
        "refresh_token": creds.refresh_token,
    }
    with open(token_file, "w") as token:
        token.write(json.dumps(payload))
    logging.info("Credentials stored at %s", token_file)


def _run_local_server(settings: Settings, prompt: Callable[[str], str]) -> Credentials:
    flow = InstalledAppFlow.from_client_secrets_file(settings.google_client_secrets, SCOPES)
    return flow.run_local_server(port=0, access_type="offline", prompt="consent")


def _run_manual(settings: Settings, prompt: Callable[[str], str]) -> Credentials:
    flow = Flow.from_client_secrets_file(
        settings.google_client_secrets, scopes=SCOPES, redirect_uri=settings.redirect_uri
    )
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    print("Authorize this app by visiting this url:")
    print(auth_url)
    code = prompt("Enter the code from that page here: ").strip()
    flow.fetch_token(code=code)
    return flow.credentials


FLOWS = {
    "local_server": _run_local_server,
    "manual": _run_manual,
}


def authorize(settings: Settings, prompt: Callable[[str], str] = input) -> Credentials:
    """Return stored credentials, or run the configured OAuth flow and store the result."""
    creds = load_credentials(settings.google_token_file)
    if creds:
        logging.debug("Using stored credentials from %s", settings.google_token_file)
        return creds

    logging.info("No stored credentials, starting %s authorization", settings.auth_mode)
    run_flow = FLOWS[settings.auth_mode]
    try:
        creds = run_flow(settings, prompt)
        save_credentials(creds, settings.google_client_secrets, settings.google_token_file)
    except Exception as exc:
        raise AuthFailure(f"Authorization failed: {exc}") from exc
    return creds
