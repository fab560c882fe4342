"""Periodic reachability probe backing the offline banner."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_PROBE_URL = "https://www.google.com"
DEFAULT_INTERVAL_SECONDS = 10.0
DEFAULT_TIMEOUT_SECONDS = 5.0

StatusListener = Callable[[bool], None]


class NetworkMonitor:
    """Probe ``probe_url`` with HEAD requests on a fixed interval and report connectivity flips."""

    def __init__(
        self,
        probe_url: str = DEFAULT_PROBE_URL,
        *,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.probe_url = probe_url
        self.interval = interval
        self.timeout = timeout
        self._http = http_client
        self._listeners: list[StatusListener] = []
        self._checking = False
        self._task: asyncio.Task[None] | None = None
        self._stop = asyncio.Event()
        self.is_connected = True

    @property
    def is_offline(self) -> bool:
        return not self.is_connected

    @property
    def is_internet_reachable(self) -> bool:
        return self.is_connected

    def add_listener(self, listener: StatusListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def _probe(self) -> None:
        if self._http is not None:
            await self._http.head(self.probe_url)
            return
        async with httpx.AsyncClient() as client:
            await client.head(self.probe_url)

    async def check_once(self) -> bool:
        """Run a single probe; any response counts as connected."""

        if self._checking:
            return self.is_connected

        self._checking = True
        try:
            await asyncio.wait_for(self._probe(), timeout=self.timeout)
            connected = True
        except (httpx.HTTPError, asyncio.TimeoutError) as exc:
            logger.debug("Connectivity probe failed: %s", type(exc).__name__)
            connected = False
        finally:
            self._checking = False

        if connected != self.is_connected:
            self.is_connected = connected
            logger.info("Network status changed: %s", "online" if connected else "offline")
            for listener in list(self._listeners):
                listener(connected)
        return connected

    async def _run(self) -> None:
        while not self._stop.is_set():
            await self.check_once()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue

    def start(self) -> None:
        """Schedule the probe loop on the running event loop."""

        if self._task is None or self._task.done():
            self._stop.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        self._stop.set()
        if self._task is not None:
            await self._task
            self._task = None


__all__ = ["NetworkMonitor", "DEFAULT_PROBE_URL"]
