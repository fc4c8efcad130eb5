"""
Pytest configuration and in-memory fakes of the Google discovery services.
"""

from __future__ import annotations

from zoneinfo import ZoneInfo

import httplib2
import pytest
from googleapiclient.errors import HttpError

from birthday_sync.config import Settings


class FakeRequest:
    def __init__(self, func, *args, **kwargs) -> None:
        self._func = func
        self._args = args
        self._kwargs = kwargs

    def execute(self):
        return self._func(*self._args, **self._kwargs)


def _page(items: list, token, page_size: int, key: str) -> dict:
    start = int(token or 0)
    response = {key: items[start : start + page_size]}
    if start + page_size < len(items):
        response["nextPageToken"] = str(start + page_size)
    return response


class FakeCalendarService:
    """Mimics calendarList/calendars/events of the Calendar v3 service."""

    def __init__(self, calendars: list[dict] | None = None, page_size: int = 2) -> None:
        self.calendars_list: list[dict] = list(calendars or [])
        self.events_by_calendar: dict[str, list[dict]] = {}
        self.page_size = page_size
        self.inserted_calendars: list[dict] = []
        self.deleted: list[str] = []
        self.fail_on_insert_count: int | None = None
        self._next_id = 0

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    # resources ------------------------------------------------------------------
    def calendarList(self):
        return _Resource(list=self._list_calendars)

    def calendars(self):
        return _Resource(insert=self._insert_calendar)

    def events(self):
        return _Resource(list=self._list_events, insert=self._insert_event, delete=self._delete_event)

    # handlers -------------------------------------------------------------------
    def _list_calendars(self, pageToken=None):
        return FakeRequest(lambda: _page(self.calendars_list, pageToken, self.page_size, "items"))

    def _insert_calendar(self, body):
        def do():
            calendar = {"id": self._new_id("cal"), **body}
            self.calendars_list.append(calendar)
            self.inserted_calendars.append(calendar)
            return calendar

        return FakeRequest(do)

    def _list_events(self, calendarId, pageToken=None):
        events = self.events_by_calendar.setdefault(calendarId, [])
        return FakeRequest(lambda: _page(events, pageToken, self.page_size, "items"))

    def _insert_event(self, calendarId, body):
        def do():
            events = self.events_by_calendar.setdefault(calendarId, [])
            if self.fail_on_insert_count is not None and len(events) >= self.fail_on_insert_count:
                raise _http_error(403, "Rate Limit Exceeded")
            event = {"id": self._new_id("evt"), **body}
            events.append(event)
            return event

        return FakeRequest(do)

    def _delete_event(self, calendarId, eventId):
        def do():
            events = self.events_by_calendar[calendarId]
            events[:] = [e for e in events if e["id"] != eventId]
            self.deleted.append(eventId)
            return ""

        return FakeRequest(do)


class FakePeopleService:
    """Mimics people().connections().list() of the People v1 service."""

    def __init__(self, people: list[dict], page_size_override: int | None = None) -> None:
        self.persons = people
        self.page_size_override = page_size_override
        self.calls: list[dict] = []

    def people(self):
        return _Resource(connections=lambda: _Resource(list=self._list))

    def _list(self, resourceName, personFields, pageSize, pageToken=None):
        self.calls.append(
            {"resourceName": resourceName, "personFields": personFields, "pageSize": pageSize, "pageToken": pageToken}
        )
        size = self.page_size_override or pageSize

        def do():
            response = _page(self.persons, pageToken, size, "connections")
            if not response["connections"]:
                del response["connections"]
            return response

        return FakeRequest(do)


class _Resource:
    def __init__(self, **methods) -> None:
        for name, method in methods.items():
            setattr(self, name, method)


def _http_error(status: int, reason: str):

    return HttpError(httplib2.Response({"status": status, "reason": reason}), reason.encode())


def person(name: str | None, *birthdays: dict, resource_name: str | None = None) -> dict:
    data: dict = {"resourceName": resource_name or f"people/{name or 'anon'}"}
    if name is not None:
        data["names"] = [{"displayName": name}]
    if birthdays:
        data["birthdays"] = [{"date": b} for b in birthdays]
    return data


@pytest.fixture
def settings(tmp_path):
    return Settings(
        calendar_name="Birthday Reminders",
        timezone=ZoneInfo("Europe/Berlin"),
        summary_template="{name} hat Geburtstag",
        google_client_secrets=str(tmp_path / "credentials.json"),
        google_token_file=str(tmp_path / "token.json"),
    )


@pytest.fixture
def calendar_service():
    return FakeCalendarService()


@pytest.fixture
def http_error():
    return _http_error
