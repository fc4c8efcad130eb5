from __future__ import annotations

import argparse
import logging

from birthday_sync.auth import authorize
from birthday_sync.config import get_settings
from birthday_sync.errors import AuthFailure, TransientProviderError
from birthday_sync.sync import build_services, run


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync Google contact birthdays to a Google Calendar")
    parser.add_argument("--manual-auth", action="store_true", help="Paste the authorization code instead of using a local server")
    parser.add_argument("--dry-run", action="store_true", help="Show actions without modifying the calendar")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    settings = get_settings()
    if not args.verbose:
        logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))
        logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.WARNING)

    if args.manual_auth:
        settings.auth_mode = "manual"

    try:
        creds = authorize(settings)
    except AuthFailure as exc:
        logging.error("%s", exc)
        return 1

    calendar_service, people_service = build_services(creds)
    try:
        run(settings, calendar_service, people_service, dry_run=args.dry_run)
    except AuthFailure as exc:
        logging.error("%s (delete %s and run again)", exc, settings.google_token_file)
        return 1
    except TransientProviderError as exc:
        logging.error("%s", exc)
        if exc.calendar_modified:
            logging.error("Calendar '%s' was partially updated; run again to rebuild it", settings.calendar_name)
        return 2

    logging.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
