"""
Session Sweeper

Background job that periodically deletes expired session rows.
Runs beside the API process; never inline with a request.
"""

import asyncio
import logging
from typing import Optional

from src.app.services.auth_service import AuthService
from src.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


async def run_session_sweeper(
    auth_service: AuthService,
    interval_seconds: float,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Sweep expired sessions every `interval_seconds` until cancelled.

    A failed sweep is logged and retried on the next tick.
    """
    log = log or logger
    log.info(f"[SWEEPER] Started, interval={interval_seconds}s")
    while True:
        try:
            deleted = await auth_service.sweep_expired_sessions()
            if deleted:
                log.info(f"[SWEEPER] Deleted {deleted} expired session(s)")
        except PersistenceError as exc:
            log.warning(f"[SWEEPER] Sweep failed: {exc.message}")
        await asyncio.sleep(interval_seconds)
