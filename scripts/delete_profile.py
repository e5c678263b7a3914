#!/usr/bin/env python3
"""
Delete a profile (by its record id), dropping its subscriptions and fixing
the follower counters of the profiles it followed.

Usage:
  python scripts/delete_profile.py --id 17
"""
from __future__ import annotations

import argparse
import sys

from profiles_api.core.config import get_settings
from profiles_api.core.errors import NotFoundError
from profiles_api.core.logging_config import setup_logging
from profiles_api.db.session import Database
from profiles_api.repositories.profile_repository import ProfileRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Delete a profile from the database")
    ap.add_argument("--id", required=True, type=int, help="Profile record id (not the user id)")
    args = ap.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    repo = ProfileRepository(Database.from_settings(settings))
    try:
        repo.delete_profile_by_id(args.id)
    except NotFoundError:
        raise SystemExit(f"Profile {args.id} not found")

    print("OK: profile deleted")
    print(f"  ID: {args.id}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
