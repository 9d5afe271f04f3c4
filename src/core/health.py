"""Health check endpoints for container orchestration.

Example:
    from src.core.health import HealthChecker, start_health_server

    checker = HealthChecker(version="1.0.0")
    checker.add_check("imgflip", check_imgflip)

    server = await start_health_server(checker, port=8080)
    ...
    await server.stop()
"""

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from aiohttp import web

from src.core.logging import get_logger

logger = get_logger(__name__)

CHECK_TIMEOUT_SECONDS = 10.0


class ServiceStatus(Enum):
    """Status of an individual service."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"


@dataclass
class ServiceCheck:
    """Result of a single service health check."""

    name: str
    status: ServiceStatus
    latency_ms: float | None = None
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "latency_ms": self.latency_ms,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class HealthReport:
    """Aggregated health report for all services."""

    status: ServiceStatus
    timestamp: str
    checks: list[ServiceCheck]
    version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "version": self.version,
            "checks": [check.to_dict() for check in self.checks],
        }


HealthCheckFunc = Callable[[], Coroutine[Any, Any, ServiceCheck]]


def overall_status(checks: list[ServiceCheck]) -> ServiceStatus:
    """Worst status wins; no checks at all counts as healthy."""
    statuses = {check.status for check in checks}
    if not statuses or statuses == {ServiceStatus.HEALTHY}:
        return ServiceStatus.HEALTHY
    if ServiceStatus.UNHEALTHY in statuses:
        return ServiceStatus.UNHEALTHY
    if ServiceStatus.DEGRADED in statuses:
        return ServiceStatus.DEGRADED
    return ServiceStatus.UNKNOWN


class HealthChecker:
    """Runs named async health checks."""

    def __init__(self, version: str | None = None) -> None:
        self._checks: dict[str, HealthCheckFunc] = {}
        self._version = version

    def add_check(self, name: str, check_func: HealthCheckFunc) -> None:
        self._checks[name] = check_func

    async def check_one(self, name: str) -> ServiceCheck:
        """Run a single check, converting timeouts and errors to UNHEALTHY.

        Raises:
            KeyError: If no check is registered with that name.
        """
        check_func = self._checks[name]
        loop = asyncio.get_running_loop()
        start = loop.time()

        try:
            result = await asyncio.wait_for(check_func(), timeout=CHECK_TIMEOUT_SECONDS)
        except TimeoutError:
            result = ServiceCheck(
                name=name,
                status=ServiceStatus.UNHEALTHY,
                message="Health check timed out",
            )
        except Exception as ex:
            result = ServiceCheck(name=name, status=ServiceStatus.UNHEALTHY, message=str(ex))

        if result.latency_ms is None:
            result.latency_ms = round((loop.time() - start) * 1000, 2)
        return result

    async def check_all(self) -> HealthReport:
        """Run every registered check concurrently."""
        checks = list(await asyncio.gather(*(self.check_one(name) for name in self._checks)))
        return HealthReport(
            status=overall_status(checks),
            timestamp=datetime.now(UTC).isoformat(),
            checks=checks,
            version=self._version,
        )


class HealthServer:
    """aiohttp server exposing /health, /ready and /live."""

    def __init__(self, checker: HealthChecker, host: str = "0.0.0.0", port: int = 8080) -> None:
        self._checker = checker
        self._host = host
        self._port = port
        self._runner: web.AppRunner | None = None

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/health", self._handle_health)
        app.router.add_get("/ready", self._handle_ready)
        app.router.add_get("/live", self._handle_live)
        return app

    async def _handle_health(self, request: web.Request) -> web.Response:
        report = await self._checker.check_all()
        logger.info(
            "health_check",
            status=report.status.value,
            checks={c.name: c.status.value for c in report.checks},
        )
        status_code = 200 if report.status == ServiceStatus.HEALTHY else 503
        return web.json_response(report.to_dict(), status=status_code)

    async def _handle_ready(self, request: web.Request) -> web.Response:
        report = await self._checker.check_all()
        is_ready = report.status in (ServiceStatus.HEALTHY, ServiceStatus.DEGRADED)
        return web.json_response(
            {"ready": is_ready, "status": report.status.value},
            status=200 if is_ready else 503,
        )

    async def _handle_live(self, request: web.Request) -> web.Response:
        return web.json_response({"alive": True})

    async def start(self) -> None:
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._host, self._port)
        await site.start()
        logger.info("health_server_started", host=self._host, port=self._port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            logger.info("health_server_stopped")


async def start_health_server(
    checker: HealthChecker, host: str = "0.0.0.0", port: int = 8080
) -> HealthServer:
    """Start a health check HTTP server and return it."""
    server = HealthServer(checker, host, port)
    await server.start()
    return server
