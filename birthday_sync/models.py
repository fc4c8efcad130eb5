from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .errors import MalformedContact

# Leap year, so Feb 29 birthdays without a year stay valid.
PLACEHOLDER_YEAR = 2000


@dataclass(frozen=True)
class Birthday:
    year: Optional[int]
    month: Optional[int]
    day: Optional[int]

    @classmethod
    def from_api(cls, data: dict) -> "Birthday":
        return cls(year=data.get("year"), month=data.get("month"), day=data.get("day"))

    def to_date(self) -> date:
        if not self.month or not self.day:
            raise MalformedContact(f"Birthday without month/day: {self}")
        try:
            return date(self.year or PLACEHOLDER_YEAR, self.month, self.day)
        except ValueError as exc:
            raise MalformedContact(f"Invalid birthday {self}: {exc}") from exc


@dataclass
class Contact:
    resource_name: str
    display_name: Optional[str]
    birthdays: List[Birthday] = field(default_factory=list)

    @classmethod
    def from_person(cls, person: dict) -> "Contact":
        names = person.get("names") or []
        display_name = names[0].get("displayName") if names else None
        # text-only birthdays carry no structured date
        birthdays = [
            Birthday.from_api(item["date"]) for item in person.get("birthdays") or [] if item.get("date")
        ]
        return cls(
            resource_name=person.get("resourceName", ""),
            display_name=display_name or None,
            birthdays=birthdays,
        )

    @property
    def label(self) -> str:
        return self.display_name or self.resource_name or "<unnamed>"


@dataclass(frozen=True)
class Calendar:
    id: str
    summary: str


@dataclass
class BirthdayEvent:
    summary: str
    date: date
    timezone: str

    def to_gcal_body(self) -> dict:
        day = self.date.isoformat()
        return {
            "summary": self.summary,
            "start": {"date": day, "timeZone": self.timezone},
            "end": {"date": day, "timeZone": self.timezone},
            "transparency": "transparent",
            "reminders": {"useDefault": True},
            "recurrence": ["RRULE:FREQ=YEARLY"],
        }


@dataclass
class SyncResult:
    calendar: Calendar
    deleted: List[str] = field(default_factory=list)
    created: List[BirthdayEvent] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def mutation_count(self) -> int:
        # dry runs only record what would have been sent
        if self.dry_run:
            return 0
        return len(self.deleted) + len(self.created)
