"""Startup warmup so the first dashboard request does not pay for a cold cache.

Warmup failures are logged and swallowed: every provider can still populate
its cache lazily on the first request.
"""

from __future__ import annotations

import logging
import time

from ipl_stats.services.container import GatewayServices

logger = logging.getLogger(__name__)


async def warmup_players(services: GatewayServices) -> None:
    """Load the roster snapshot into the cache."""

    try:
        start = time.time()
        lookup = await services.players.resolve_players()
        elapsed = (time.time() - start) * 1000
        logger.info(
            "✓ Player roster warmed up: %d players from %s source (%.0fms)",
            len(lookup.value.value),
            lookup.value.source,
            elapsed,
        )
    except Exception as e:
        logger.warning(f"Player roster warmup failed: {e}")


async def warmup_all(services: GatewayServices) -> None:
    """Run every warmup step and log the total time taken."""

    logger.info("=" * 60)
    logger.info("Warming up gateway caches...")
    logger.info("=" * 60)

    start = time.time()
    await warmup_players(services)

    total_elapsed = (time.time() - start) * 1000
    logger.info("=" * 60)
    logger.info(f"✓ Gateway warmup complete ({total_elapsed:.0f}ms)")
    logger.info("=" * 60)


__all__ = ["warmup_all", "warmup_players"]
