from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from string import Formatter
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

SCOPES = [
    "https://www.googleapis.com/auth/contacts.readonly",
    "https://www.googleapis.com/auth/calendar",
]

DEFAULT_CALENDAR_NAME = "Birthday Reminders"
DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_SUMMARY_TEMPLATE = "{name} hat Geburtstag"
AUTH_MODES = ("local_server", "manual")
# People API caps connections.list at 1000 per page
MAX_PAGE_SIZE = 1000


@dataclass
class Settings:
    calendar_name: str
    timezone: ZoneInfo
    summary_template: str
    google_client_secrets: str
    google_token_file: str
    auth_mode: str = "local_server"
    redirect_uri: str = "urn:ietf:wg:oauth:2.0:oob"
    contacts_page_size: int = 10
    log_level: str = "INFO"


def get_timezone() -> ZoneInfo:
    tz_name = os.getenv("TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(tz_name)
    except Exception:
        logging.warning("Invalid TIMEZONE %s, falling back to %s", tz_name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def get_auth_mode() -> str:
    mode = os.getenv("GOOGLE_AUTH_MODE", "local_server").strip().lower()
    if mode not in AUTH_MODES:
        logging.warning("Unknown GOOGLE_AUTH_MODE %s, falling back to local_server", mode)
        return "local_server"
    return mode


def get_page_size() -> int:
    raw = os.getenv("CONTACTS_PAGE_SIZE", "10")
    try:
        size = int(raw)
    except ValueError:
        logging.warning("Invalid CONTACTS_PAGE_SIZE %s, using 10", raw)
        return 10
    return max(1, min(size, MAX_PAGE_SIZE))


def get_summary_template() -> str:
    template = os.getenv("BIRTHDAY_SUMMARY_TEMPLATE", DEFAULT_SUMMARY_TEMPLATE)
    try:
        fields = {name for _, name, _, _ in Formatter().parse(template) if name is not None}
        template.format(name="")
    except (ValueError, KeyError, IndexError) as exc:
        logging.warning("Invalid BIRTHDAY_SUMMARY_TEMPLATE %r (%s), using default", template, exc)
        return DEFAULT_SUMMARY_TEMPLATE
    if fields - {"name"}:
        logging.warning("BIRTHDAY_SUMMARY_TEMPLATE %r may only use {name}, using default", template)
        return DEFAULT_SUMMARY_TEMPLATE
    if not fields:
        logging.warning("BIRTHDAY_SUMMARY_TEMPLATE has no {name} placeholder")
    return template


def get_settings() -> Settings:
    settings = Settings(
        calendar_name=os.getenv("BIRTHDAY_CALENDAR_NAME", DEFAULT_CALENDAR_NAME),
        timezone=get_timezone(),
        summary_template=get_summary_template(),
        google_client_secrets=os.getenv("GOOGLE_CLIENT_SECRETS", "credentials.json"),
        google_token_file=os.getenv("GOOGLE_TOKEN_FILE", "token.json"),
        auth_mode=get_auth_mode(),
        redirect_uri=os.getenv("GOOGLE_REDIRECT_URI", "urn:ietf:wg:oauth:2.0:oob"),
        contacts_page_size=get_page_size(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
    return settings
