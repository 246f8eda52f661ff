"""
Tests for background task execution and the OTP record sweeper.
"""

import asyncio

import pytest

from labtracka_core.background import BackgroundTasks
from labtracka_core.otp import OTPRecordSweeper


class TestBackgroundTasks:

    @pytest.mark.asyncio
    async def test_runs_blocking_callable(self):
        calls = []
        tasks = BackgroundTasks()

        tasks.run("append", calls.append, "done")
        await tasks.wait()

        assert calls == ["done"]
        assert tasks.pending == 0

    @pytest.mark.asyncio
    async def test_failure_is_contained(self):
        """A failing job is logged and does not raise out of wait()."""
        tasks = BackgroundTasks()

        def explode():
            raise RuntimeError("boom")

        tasks.run("explode", explode)
        await tasks.wait()

        assert tasks.pending == 0


class TestOTPRecordSweeper:

    def test_sweep_once(self, manager, sender, clock):
        manager.send_otp("d1", "a@x.com", sender)
        clock.advance(601)

        assert OTPRecordSweeper(manager).sweep_once() == 1
        assert manager.record_count == 0

    @pytest.mark.asyncio
    async def test_periodic_sweep(self, manager, sender, clock):
        manager.send_otp("d1", "a@x.com", sender)
        manager.send_otp("d2", "a@x.com", sender)
        clock.advance(601)

        sweeper = OTPRecordSweeper(manager, interval=0.01)
        sweeper.start()
        assert sweeper.running

        for _ in range(100):
            if manager.record_count == 0:
                break
            await asyncio.sleep(0.01)

        await sweeper.stop()

        assert manager.record_count == 0
        assert not sweeper.running

    @pytest.mark.asyncio
    async def test_keeps_running_after_failed_pass(self, manager, sender, clock, monkeypatch):
        manager.send_otp("d1", "a@x.com", sender)
        clock.advance(601)

        sweep_expired = manager.sweep_expired
        calls = []

        def flaky_sweep():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("store unavailable")
            return sweep_expired()

        monkeypatch.setattr(manager, "sweep_expired", flaky_sweep)

        sweeper = OTPRecordSweeper(manager, interval=0.01)
        sweeper.start()

        for _ in range(100):
            if manager.record_count == 0:
                break
            await asyncio.sleep(0.01)

        assert sweeper.running
        await sweeper.stop()

        assert len(calls) >= 2
        assert manager.record_count == 0

    @pytest.mark.asyncio
    async def test_stop_without_start(self, manager):
        await OTPRecordSweeper(manager).stop()
