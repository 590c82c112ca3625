"""Logging setup, structured events, and optional StatsD counters."""

from __future__ import annotations

import json
import logging
import socket
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from ibadat.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LOGGER = logging.getLogger("ibadat.observability")
_STATSD_LOCK = threading.Lock()
_SHARED_STATSD: "StatsdClient | None" = None


def configure_logging(level: str | int | None = None, *, settings: Settings | None = None) -> None:
    """Configure root logging for CLI and API entry points.

    ``level`` wins over ``runtime.log_level`` from settings.
    """

    if level is None:
        level = (settings or get_settings()).log_level
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass(slots=True)
class StatsdClient:
    """Fire-and-forget StatsD counters over UDP."""

    host: str
    port: int
    prefix: str
    _socket: socket.socket = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def format(self, metric: str, value: float, tags: Mapping[str, str] | None = None) -> str:
        scoped = f"{self.prefix}.{metric}" if self.prefix else metric
        payload = f"{scoped}:{_format_number(value)}|c"
        if tags:
            payload = f"{payload}|#" + ",".join(f"{key}:{val}" for key, val in sorted(tags.items()))
        return payload

    def increment(self, metric: str, *, value: float = 1.0, tags: Mapping[str, str] | None = None) -> None:
        payload = self.format(metric, value, tags)
        try:
            self._socket.sendto(payload.encode("utf-8"), (self.host, self.port))
        except OSError:
            _LOGGER.debug("StatsD send failed for metric %s", metric, exc_info=True)


class Observability:
    """Emit deed-engine events as log lines and count them in StatsD."""

    def __init__(
        self,
        *,
        settings: Settings,
        component: str | None = None,
        statsd: StatsdClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.component = component or "core"
        self._logger = logger or _LOGGER
        self._structured_logging = bool(settings.observability.structured_logging)
        self._statsd = statsd

    def emit_event(self, event: str, **fields: Any) -> None:
        """Log ``event`` with ``fields``; JSON when structured logging is on."""

        payload = {
            "event": event,
            "component": self.component,
            "service": self.settings.observability.service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **{str(key): value for key, value in fields.items()},
        }
        if self._structured_logging:
            self._logger.info(json.dumps(payload, default=str, ensure_ascii=False))
        else:
            self._logger.info("%s | %s", event, payload)

    def increment(self, metric: str, *, value: float = 1.0, tags: Mapping[str, str] | None = None) -> None:
        if self._statsd is None:
            return
        cleaned = {str(key): str(val) for key, val in (tags or {}).items() if val is not None}
        self._statsd.increment(metric, value=value, tags=cleaned or None)


def get_observability(*, component: str | None = None, settings: Settings | None = None) -> Observability:
    """Return an :class:`Observability` for ``component`` sharing one StatsD client."""

    resolved = settings or get_settings()
    return Observability(settings=resolved, component=component, statsd=_shared_statsd(resolved))


def reset_observability_cache() -> None:
    """Drop the shared StatsD client (used in tests)."""

    global _SHARED_STATSD
    with _STATSD_LOCK:
        _SHARED_STATSD = None


def _shared_statsd(settings: Settings) -> StatsdClient | None:
    global _SHARED_STATSD
    with _STATSD_LOCK:
        if _SHARED_STATSD is None and settings.observability.statsd_host:
            _SHARED_STATSD = StatsdClient(
                host=settings.observability.statsd_host,
                port=settings.observability.statsd_port,
                prefix=settings.observability.statsd_prefix,
            )
        return _SHARED_STATSD


def _format_number(value: float) -> str:
    formatted = f"{value:.6f}".rstrip("0").rstrip(".")
    return formatted or "0"


__all__ = [
    "LOG_FORMAT",
    "Observability",
    "StatsdClient",
    "configure_logging",
    "get_observability",
    "reset_observability_cache",
]
