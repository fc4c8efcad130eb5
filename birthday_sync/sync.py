from __future__ import annotations

import logging

from googleapiclient.discovery import build

from .config import Settings
from .contacts import list_all_contacts
from .gcal import get_or_create_calendar, resync
from .models import SyncResult


def build_services(creds):
    calendar = build("calendar", "v3", credentials=creds)
    people = build("people", "v1", credentials=creds)
    return calendar, people


def run(settings: Settings, calendar_service, people_service, dry_run: bool = False) -> SyncResult:
    calendar = get_or_create_calendar(calendar_service, settings.calendar_name)
    logging.info("Using calendar '%s' (%s)", calendar.summary, calendar.id)

    # read contacts before touching the calendar
    contacts = list(list_all_contacts(people_service, settings.contacts_page_size))
    logging.info("Found %d contacts", len(contacts))

    return resync(calendar_service, calendar, contacts, settings, dry_run=dry_run)
