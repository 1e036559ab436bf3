#!/usr/bin/env python3
"""
Repair the follow graph so every profile's followers / following lists agree.

Drops self references, duplicate entries and references to profiles that no
longer exist, then adds the missing side of any one-sided follow edge.

Reads DATABASE_URL from .env (falls back to the application default).

Usage:
    python -m scripts.reconcile_social_graph            # apply repairs
    python -m scripts.reconcile_social_graph --dry-run  # report only, roll back
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add repo root to path so imports resolve without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from socialnest.config import Settings  # noqa: E402
from socialnest.core.database import get_async_session_factory  # noqa: E402
import socialnest.database  # noqa: E402,F401  (registers all models)
from socialnest.social_graph.service import reconcile_follow_graph  # noqa: E402


async def main(dry_run: bool) -> None:
    settings = Settings()
    session_factory = get_async_session_factory(settings.database_url)

    async with session_factory() as session:
        report = await reconcile_follow_graph(session)
        if dry_run:
            await session.rollback()
        else:
            await session.commit()

    print(f"Profiles scanned:         {report.profiles_scanned}")
    print(f"Self references removed:  {report.self_references_removed}")
    print(f"Duplicates removed:       {report.duplicates_removed}")
    print(f"Dangling refs removed:    {report.dangling_removed}")
    print(f"One-sided edges repaired: {report.edges_repaired}")
    print(f"Profiles changed:         {report.profiles_changed}")
    if dry_run:
        print("Dry run: no changes were written.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--dry-run", action="store_true", help="report without writing")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    asyncio.run(main(args.dry_run))
