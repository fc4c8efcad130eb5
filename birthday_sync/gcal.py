from __future__ import annotations

import logging
from typing import Iterable, List

from .config import Settings
from .errors import MalformedContact, TransientProviderError
from .models import BirthdayEvent, Calendar, Contact, SyncResult
from .utils import execute, iter_pages


def find_calendar(service, name: str):
    for item in iter_pages(service.calendarList().list, "items", "list calendars"):
        if item.get("summary") == name:
            return Calendar(id=item["id"], summary=item["summary"])
    return None


def create_calendar(service, name: str) -> Calendar:
    logging.info("Creating calendar '%s'", name)
    created = execute(service.calendars().insert(body={"summary": name}), "create calendar")
    return Calendar(id=created["id"], summary=created.get("summary", name))


def get_or_create_calendar(service, name: str) -> Calendar:
    return find_calendar(service, name) or create_calendar(service, name)


def fetch_existing_events(service, calendar_id: str) -> List[dict]:
    # materialized so deletions cannot shift later pages
    return list(
        iter_pages(service.events().list, "items", "list events", calendarId=calendar_id)
    )


def clear_calendar(service, calendar: Calendar, result: SyncResult, dry_run: bool = False) -> None:
    events = fetch_existing_events(service, calendar.id)
    if not events:
        return

    logging.info("Clearing %d events from calendar '%s'...", len(events), calendar.summary)
    for event in events:
        logging.debug("DELETE %s %s", event["id"], event.get("summary", ""))
        if not dry_run:
            execute(
                service.events().delete(calendarId=calendar.id, eventId=event["id"]),
                f"delete event {event['id']}",
            )
        result.deleted.append(event["id"])


def build_birthday_event(contact: Contact, settings: Settings) -> BirthdayEvent:
    """Event for the contact's first birthday; MalformedContact if it can't be built."""
    if not contact.display_name:
        raise MalformedContact(f"Contact {contact.resource_name or '<unknown>'} has no display name")
    return BirthdayEvent(
        summary=settings.summary_template.format(name=contact.display_name),
        date=contact.birthdays[0].to_date(),
        timezone=settings.timezone.key,
    )


def add_birthday_events(
    service,
    calendar: Calendar,
    contacts: Iterable[Contact],
    settings: Settings,
    result: SyncResult,
    dry_run: bool = False,
) -> None:
    for contact in contacts:
        if not contact.birthdays:
            logging.debug("Skipping %s: no birthday", contact.label)
            continue
        try:
            event = build_birthday_event(contact, settings)
        except MalformedContact as exc:
            logging.warning("Skipping contact: %s", exc)
            result.skipped.append(contact.label)
            continue

        logging.info("Adding %s (%s) ...", contact.label, event.date.isoformat())
        if not dry_run:
            execute(
                service.events().insert(calendarId=calendar.id, body=event.to_gcal_body()),
                f"create event for {contact.label}",
            )
        result.created.append(event)


def resync(
    service,
    calendar: Calendar,
    contacts: Iterable[Contact],
    settings: Settings,
    dry_run: bool = False,
) -> SyncResult:
    """Delete every event in the calendar, then add one yearly event per birthday."""
    result = SyncResult(calendar=calendar, dry_run=dry_run)
    try:
        clear_calendar(service, calendar, result, dry_run=dry_run)
        add_birthday_events(service, calendar, contacts, settings, result, dry_run=dry_run)
    except TransientProviderError as exc:
        logging.error(
            "Aborted after deleting %d and creating %d events in '%s'",
            len(result.deleted),
            len(result.created),
            calendar.summary,
        )
        exc.partial = result
        raise
    logging.info(
        "Sync complete. %d deleted, %d created, %d skipped",
        len(result.deleted),
        len(result.created),
        len(result.skipped),
    )
    return result
