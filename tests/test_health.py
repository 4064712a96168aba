"""Unit tests for the health checker."""

import secrets

import pytest

from core.health import (
    CheckResult,
    HealthChecker,
    Status,
    check_codec,
    check_random_source,
)


class TestChecks:
    """Tests for built-in checks."""

    @pytest.mark.asyncio
    async def test_codec_check_ok(self):
        result = await check_codec()
        assert result.status == Status.OK

    @pytest.mark.asyncio
    async def test_random_check_ok(self):
        result = await check_random_source()
        assert result.status == Status.OK

    @pytest.mark.asyncio
    async def test_random_check_degraded_without_source(self, monkeypatch):
        def unavailable(bits):
            raise NotImplementedError

        monkeypatch.setattr(secrets, "randbits", unavailable)
        result = await check_random_source()
        assert result.status == Status.DEGRADED


class TestHealthChecker:
    """Tests for HealthChecker aggregation."""

    @pytest.mark.asyncio
    async def test_all_ok(self):
        checker = HealthChecker(ttl=0)
        checker.register("codec", check_codec)
        report = await checker.check()
        assert report.status == Status.OK
        assert report.to_dict()["checks"][0]["name"] == "codec"

    @pytest.mark.asyncio
    async def test_critical_failure(self):
        async def failing():
            raise RuntimeError("down")

        checker = HealthChecker(ttl=0)
        checker.register("codec", check_codec)
        checker.register("broken", failing, critical=True)
        report = await checker.check()
        assert report.status == Status.FAIL

    @pytest.mark.asyncio
    async def test_non_critical_degrades(self):
        async def degraded():
            return CheckResult("random", Status.DEGRADED, "insecure fallback")

        checker = HealthChecker(ttl=0)
        checker.register("random_source", degraded, critical=False)
        report = await checker.check()
        assert report.status == Status.DEGRADED

    @pytest.mark.asyncio
    async def test_report_is_cached(self):
        checker = HealthChecker(ttl=60)
        checker.register("codec", check_codec)
        first = await checker.check()
        second = await checker.check()
        assert first is second
