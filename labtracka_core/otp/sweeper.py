"""
OTP Record Sweeper
==================
Optional periodic cleanup that bounds memory held by abandoned OTP records.

Expiry is already enforced lazily on lookup; the sweeper only reclaims
records nobody looks up again.
"""

import asyncio
from typing import Optional
import structlog

from .manager import OTPManager

logger = structlog.get_logger(__name__)


class OTPRecordSweeper:
    """
    Runs ``OTPManager.sweep_expired`` on a fixed interval.

    Example:
        sweeper = OTPRecordSweeper(manager)
        sweeper.start()
        ...
        await sweeper.stop()
    """

    def __init__(self, manager: OTPManager, interval: Optional[float] = None):
        self.manager = manager
        self.interval = interval or manager.config.sweep_interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        removed = self.manager.sweep_expired()
        if removed:
            logger.info(
                "otp_records_swept",
                removed=removed,
                remaining=self.manager.record_count,
            )
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.sweep_once()
            except Exception as e:
                logger.error("otp_sweep_failed", error=str(e), error_type=type(e).__name__)

    def start(self) -> None:
        """Start sweeping on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("otp_sweeper_started", interval=self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("otp_sweeper_stopped")
