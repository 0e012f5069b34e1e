"""
Seed script for the Semita mock DB or Firestore.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Force mock DB even if Firestore configured: python scripts/seed_db.py --apply --force-mock
  - Services only: python scripts/seed_db.py --apply --services-only

Behavior:
  - Seeds the five default services that are missing.
  - When the complaint ledger is empty, submits demo complaints with comments,
    votes and status changes (which also produces notifications).

NOTE: When applying to real Firestore, ensure `FIREBASE_CREDENTIALS_PATH` and
`USE_MOCK_DB=false` are set in `.env`.
"""

import argparse
import logging

from semita.config.storage import get_store, set_store
from semita.core.settings import settings
from semita.services.seed import DEMO_COMPLAINTS, seed_demo_data
from semita.services.service_status import DEFAULT_SERVICES


def describe(include_complaints: bool) -> None:
    for service in DEFAULT_SERVICES:
        print(f"Preparing: service:{service['id']}")
    if include_complaints:
        for complaint in DEMO_COMPLAINTS:
            print(f"Preparing: complaint '{complaint['title']}' ({len(complaint['comments'])} comments, {len(complaint['votes'])} votes)")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if Firestore configured")
    parser.add_argument("--services-only", action="store_true", help="Only seed the default services")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    include_complaints = not args.services_only

    describe(include_complaints)
    if not args.apply:
        print("Dry run complete. Re-run with --apply to write to DB.")
        return

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        settings.USE_MOCK_DB = True
        set_store(None)

    counts = seed_demo_data(get_store(), include_complaints=include_complaints)
    print(f"Seeding completed: {counts['services']} service(s), {counts['complaints']} complaint(s) written.")


if __name__ == "__main__":
    main()
