#!/usr/bin/env python3
"""
Create the profile for an identity that already exists at the provider.

Used to repair accounts left without a profile when signup failed halfway,
or to provision the first admin.

Usage:
  python scripts/create_profile.py --id <identity-id> --email a@b.c --name "Ana" [--role admin]
"""
from __future__ import annotations

import argparse
import sys

from gym_api.core.config import get_settings
from gym_api.domain.members import Role
from gym_api.repositories import build_store
from gym_api.repositories.kv_store import KeyValueStore
from gym_api.services.profile_service import ProfileStore


def main(argv: list[str] | None = None, store: KeyValueStore | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create a profile for an existing identity")
    ap.add_argument("--id", required=True, help="identity id issued by the provider")
    ap.add_argument("--email", required=True)
    ap.add_argument("--name", required=True)
    ap.add_argument("--role", choices=[r.value for r in Role], default=Role.MEMBER.value)
    args = ap.parse_args(argv)

    user_id = args.id.strip()
    if not user_id:
        raise SystemExit("Invalid identity id")
    profiles = ProfileStore(store if store is not None else build_store(get_settings()))
    if profiles.get_profile(user_id):
        raise SystemExit(f"Profile for '{user_id}' already exists")

    profile = profiles.create_profile(user_id, args.email.strip(), args.name.strip(), args.role)
    print("OK: profile created")
    print(f"  id: {profile.id}")
    print(f"  email: {profile.email}")
    print(f"  role: {profile.role.value}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI use
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
