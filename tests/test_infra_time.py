"""Tests for time utilities."""

from datetime import datetime, timezone


class TestUtcNow:
    """Tests for utc_now()."""

    def test_returns_utc_datetime(self):
        from tufan.infra.time import utc_now

        now = utc_now()
        assert now.tzinfo == timezone.utc

    def test_returns_current_time(self):
        from tufan.infra.time import utc_now

        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestLocalNow:
    """Tests for local_now()."""

    def test_machine_local_when_timezone_unset(self):
        from tufan.infra.time import local_now

        now = local_now()
        assert now.tzinfo is not None
        assert now.utcoffset() == datetime.now().astimezone().utcoffset()

    def test_uses_configured_timezone(self, monkeypatch):
        from tufan.infra.time import local_now

        monkeypatch.setenv("TUFAN_TIMEZONE", "Asia/Dhaka")

        now = local_now()
        assert str(now.tzinfo) == "Asia/Dhaka"
        assert now.utcoffset().total_seconds() == 6 * 3600

    def test_same_instant_as_utc(self, monkeypatch):
        from tufan.infra.time import local_now, utc_now

        monkeypatch.setenv("TUFAN_TIMEZONE", "Asia/Dhaka")

        before = utc_now()
        now = local_now()
        after = utc_now()

        assert before <= now <= after

    def test_reads_clock_through_utc_now(self, monkeypatch):
        import tufan.infra.time as time_module

        fixed = datetime(2025, 6, 15, 6, 30, tzinfo=timezone.utc)
        monkeypatch.setattr(time_module, "utc_now", lambda: fixed)
        monkeypatch.setenv("TUFAN_TIMEZONE", "Asia/Dhaka")

        now = time_module.local_now()

        assert now == fixed
        assert (now.hour, now.minute) == (12, 30)
