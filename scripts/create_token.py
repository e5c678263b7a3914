#!/usr/bin/env python3
"""
Print a signed bearer token for a user id, using JWT_SECRET from the env.

Usage:
  python scripts/create_token.py --sub 42 [--email alice@example.com] [--ttl 86400]
"""
from __future__ import annotations

import argparse
import sys

from profiles_api.core.config import get_settings
from profiles_api.core.security import TokenVerifier


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a bearer token for the profiles API")
    ap.add_argument("--sub", required=True, type=int, help="User id to put in the sub claim")
    ap.add_argument("--email", help="Optional userEmail claim")
    ap.add_argument("--ttl", type=int, default=365 * 24 * 60 * 60, help="Lifetime in seconds (0 = no exp)")
    args = ap.parse_args()

    settings = get_settings()
    verifier = TokenVerifier(settings.jwt_secret, settings.jwt_algorithm)
    token = verifier.issue_token(args.sub, email=args.email, expires_in=args.ttl or None)
    print(token)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
