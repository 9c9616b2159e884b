import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)


def _ping_database() -> None:
    with connections["default"].cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


PROBES: Dict[str, Callable[[], None]] = {
    "database": _ping_database,
    "cache": _ping_cache,
}


def _probe(name: str, ping: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        ping()
    except Exception:
        logger.exception("health_check.service_down", service=name)
        return {"status": "down"}
    elapsed_ms = round((time.monotonic() - start) * 1000, 2)
    return {"status": "up", "response_time_ms": elapsed_ms}


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health (public). 503 when any backing service is down."""
    services = {name: _probe(name, ping) for name, ping in PROBES.items()}
    healthy = all(s["status"] == "up" for s in services.values())
    status_label = "healthy" if healthy else "unhealthy"
    logger.info("health_check.completed", status=status_label)

    return JsonResponse(
        {
            "status": status_label,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
