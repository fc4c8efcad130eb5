from __future__ import annotations

from typing import Iterator

from .models import Contact
from .utils import iter_pages

PERSON_FIELDS = "names,birthdays"


def list_all_contacts(service, page_size: int = 10) -> Iterator[Contact]:
    """Lazily yield every connection of the signed-in user, in provider order."""
    connections = service.people().connections()
    for person in iter_pages(
        connections.list,
        "connections",
        "list contacts",
        resourceName="people/me",
        personFields=PERSON_FIELDS,
        pageSize=page_size,
    ):
        yield Contact.from_person(person)
