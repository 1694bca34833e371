#!/usr/bin/env python3
"""Provision a staff admin account directly in the database.

Usage:
  python scripts/create_admin.py --username alice --password '...'

Staff registration over HTTP needs an existing admin token; use this (or the
BOOTSTRAP_ADMIN_* settings) to create the first one.
"""
from __future__ import annotations

import argparse
import asyncio
import sys


async def _create(username: str, password: str) -> int:
    from cafeteria.core.bootstrap import initialize_database
    from cafeteria.core.settings import settings
    from cafeteria.storage import repository
    from cafeteria.storage.database import SessionLocal, engine

    async with SessionLocal() as session:
        await initialize_database(session, engine, settings)
        result = await repository.create_admin(session, username=username, password=password)
    await engine.dispose()

    if not result.ok:
        print("ERROR:", result.failure.message)
        return 1
    print(f"Created admin: {result.value.username}")
    return 0


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--username", required=True)
    ap.add_argument("--password", required=True)
    args = ap.parse_args()
    return asyncio.run(_create(args.username, args.password))


if __name__ == "__main__":
    sys.exit(main())
