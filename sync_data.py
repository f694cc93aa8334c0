#!/usr/bin/env python3
"""
Warm, inspect or clear the local teacher data cache.

Usage:
    python sync_data.py TOKEN               # Load every domain (cache first)
    python sync_data.py TOKEN --force       # Re-download every domain
    python sync_data.py --status            # Show cache validity and TTLs
    python sync_data.py --clear             # Remove cached teacher data
"""

import asyncio
import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from loguru import logger

from app.container import build_container
from app.models import DomainKey, Identity, Role
from app.repositories import DAY
from settings import API_BASE_URL, CACHE_PATH, MAX_CONCURRENT
from settings.logging import setup_logging
from web.api import cache

TEACHER = Identity(is_authenticated=True, role=Role.TEACHER)


async def show_status(c) -> bool:
    """Print validity per domain. Returns True when every domain is cached."""
    status = await cache.get_cache_status(c.orchestrator)
    snapshot = await cache.get_storage_snapshot(c.orchestrator)

    print("\n" + "=" * 60)
    print("TEACHER DATA CACHE")
    print("=" * 60)
    for item in status.items:
        mark = "✅" if item.valid else "❌"
        remaining = f"{item.remaining_seconds / DAY:.1f}d left" if item.remaining_seconds else "-"
        print(f"  {mark} {item.domain:<22} {item.storage_key:<32} {remaining}")
    print(f"\n  Keys: {len(snapshot.keys)}")
    print(f"  Size: {snapshot.total_size_bytes / 1024:.1f} KB")
    print("=" * 60 + "\n")
    return all(i.valid for i in status.items)


async def load(token: str, force: bool) -> bool:
    """Sign in, load every domain and report failures.

    ``force`` skips the cache-first pass and re-downloads every domain once.
    """
    async with build_container(token=token) as c:
        if force:
            c.sign_in(token, TEACHER, autoload=False)
            await c.orchestrator.refresh_all()
        else:
            await c.sign_in(token, TEACHER)
        failed = {k: s.error for k, s in c.orchestrator.states.items() if s.error}
        for key, error in failed.items():
            logger.error("{}: {}", key.label, error)
        await show_status(c)
        return not failed


async def clear() -> None:
    async with build_container() as c:
        await c.service.clear_all()
        logger.info("Removed {} cached domains", len(DomainKey))


async def status() -> bool:
    async with build_container() as c:
        return await show_status(c)


def main():
    setup_logging(level="INFO", to_file=True)
    args = sys.argv[1:]

    if "--status" in args:
        if not asyncio.run(status()):
            sys.exit(1)
        return

    if "--clear" in args:
        asyncio.run(clear())
        return

    force = "--force" in args or "-f" in args
    args = [a for a in args if a not in ("--force", "-f")]
    if len(args) != 1:
        print(__doc__)
        sys.exit(1)

    mode = "FORCE (re-download all)" if force else "CACHE FIRST (fetch missing or expired)"
    logger.info("Mode: {}", mode)
    logger.info("Cache: {} | API: {} | {} concurrent", CACHE_PATH, API_BASE_URL, MAX_CONCURRENT)

    if not asyncio.run(load(args[0], force)):
        sys.exit(1)


if __name__ == "__main__":
    main()
