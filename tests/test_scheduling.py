"""Tests for the daily sweep trigger."""

import logging
from datetime import datetime, time

from fintracker.scheduling import DailySweepTrigger

NOW = datetime(2024, 3, 10, 23, 0)


class TestNextRunAfter:
    def test_later_today(self):
        trigger = DailySweepTrigger(sweep=lambda now: None, run_at=time(23, 30))

        assert trigger.next_run_after(NOW) == datetime(2024, 3, 10, 23, 30)

    def test_tomorrow_when_time_passed(self):
        trigger = DailySweepTrigger(sweep=lambda now: None)

        assert trigger.next_run_after(NOW) == datetime(2024, 3, 11, 0, 0)

    def test_exact_run_time_moves_to_next_day(self):
        trigger = DailySweepTrigger(sweep=lambda now: None, run_at=time(23, 0))

        assert trigger.next_run_after(NOW) == datetime(2024, 3, 11, 23, 0)


class TestRunOnce:
    def test_passes_clock_time_and_returns_result(self):
        seen = []

        def sweep(now):
            seen.append(now)
            return ["created"]

        trigger = DailySweepTrigger(sweep=sweep, clock=lambda: NOW)

        assert trigger.run_once() == ["created"]
        assert seen == [NOW]

    def test_failure_is_logged_not_raised(self, caplog):
        def sweep(now):
            raise RuntimeError("database locked")

        trigger = DailySweepTrigger(sweep=sweep, clock=lambda: NOW)

        with caplog.at_level(logging.ERROR, logger="fintracker.scheduling"):
            assert trigger.run_once() is None

        assert "Scheduled sweep" in caplog.text
        assert "database locked" in caplog.text


class TestRunForever:
    def test_returns_immediately_when_stopped(self):
        calls = []
        trigger = DailySweepTrigger(sweep=calls.append, clock=lambda: NOW)
        trigger.stop()

        trigger.run_forever()

        assert trigger.stopped
        assert calls == []

    def test_waits_until_run_time_then_sweeps(self, monkeypatch):
        waits = []
        calls = []
        trigger = DailySweepTrigger(sweep=None, clock=lambda: NOW)

        def sweep(now):
            calls.append(now)
            trigger.stop()

        trigger.sweep = sweep
        monkeypatch.setattr(trigger._stop, "wait", lambda seconds: waits.append(seconds) or False)

        trigger.run_forever()

        assert waits == [3600.0]
        assert calls == [NOW]

    def test_failed_sweep_does_not_stop_loop(self, monkeypatch):
        attempts = []
        trigger = DailySweepTrigger(sweep=None, clock=lambda: NOW)

        def sweep(now):
            attempts.append(now)
            if len(attempts) == 2:
                trigger.stop()
            raise RuntimeError("boom")

        trigger.sweep = sweep
        monkeypatch.setattr(trigger._stop, "wait", lambda seconds: False)

        trigger.run_forever()

        assert len(attempts) == 2
