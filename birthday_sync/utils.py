from __future__ import annotations

import logging
from typing import Callable, Iterator

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError

from .errors import AuthFailure, TransientProviderError


def execute(request, what: str):
    """Run a googleapiclient request, mapping failures to our error kinds."""
    try:
        return request.execute()
    except RefreshError as exc:
        raise AuthFailure(f"Stored credential rejected while trying to {what}: {exc}") from exc
    except HttpError as exc:
        raise TransientProviderError(f"Failed to {what}: {exc}") from exc
    except (TransportError, httplib2.HttpLib2Error, OSError) as exc:
        raise TransientProviderError(f"Network error while trying to {what}: {exc}") from exc


def iter_pages(list_method: Callable, items_key: str, what: str, **params) -> Iterator[dict]:
    """Yield items from every page of a list call, following nextPageToken."""
    page_token = None
    pages = 0
    while True:
        response = execute(list_method(pageToken=page_token, **params), what)
        pages += 1
        yield from response.get(items_key, [])
        page_token = response.get("nextPageToken")
        if not page_token:
            break
    logging.debug("Fetched %d page(s) to %s", pages, what)
