"""
Health probe functions for dependency checks.

Each probe:
- Returns bool (True = healthy, False = unhealthy)
- Handles exceptions gracefully
- Includes a timeout so readiness never hangs
"""

import asyncio
import logging

from google.cloud.firestore import AsyncClient

from serviflex.core.collections import ESTABLISHMENTS

logger = logging.getLogger(__name__)


async def check_firestore(db: AsyncClient, timeout_seconds: float = 2.0) -> bool:
    """
    Check Firestore connectivity.

    Runs a single-document read against a known collection. An empty
    collection still counts as healthy; only errors and timeouts fail.

    Args:
        db: Firestore client to probe
        timeout_seconds: Maximum time to wait for response (default: 2.0)

    Returns:
        True if Firestore answered in time, False otherwise
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            await db.collection(ESTABLISHMENTS).limit(1).get()
            return True

    except asyncio.TimeoutError:
        logger.warning("Firestore probe timed out", extra={"timeout_seconds": timeout_seconds})
        return False
    except Exception as exc:
        logger.warning(f"Firestore probe failed: {exc}")
        return False
