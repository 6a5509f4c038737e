"""
Network reachability monitoring.

The monitor answers "is the network reachable right now?" synchronously
and notifies subscribers on every transition. Notifications arrive on the
monitor's polling thread.
"""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

ReachabilityCallback = Callable[[bool], None]
Unsubscribe = Callable[[], None]


class ReachabilityMonitor(Protocol):
    """Connectivity status plus transition notifications."""

    def is_reachable(self) -> bool:
        ...

    def subscribe(self, callback: ReachabilityCallback) -> Unsubscribe:
        ...


class SocketReachabilityMonitor:
    """Reachability monitor that probes a host with a TCP connect.

    Call start() to begin polling; subscribers are told about every change
    between reachable and unreachable.
    """

    def __init__(
        self,
        host: str,
        port: int = 443,
        *,
        interval: float = 5.0,
        timeout: float = 3.0,
    ):
        self.host = host
        self.port = port
        self.interval = interval
        self.timeout = timeout

        self._lock = threading.Lock()
        self._subscribers: list[ReachabilityCallback] = []
        self._status: bool | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def probe(self) -> bool:
        """Try one TCP connection to the probe host."""
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except OSError as e:
            logger.debug("Reachability probe to %s:%s failed: %s", self.host, self.port, e)
            return False

    def is_reachable(self) -> bool:
        """Last known status, probing once if nothing is known yet."""
        with self._lock:
            status = self._status
        if status is None:
            status = self.check()
        return status

    def check(self) -> bool:
        """Probe now, record the result and notify subscribers if it changed."""
        reachable = self.probe()
        with self._lock:
            previous = self._status
            self._status = reachable
            subscribers = list(self._subscribers)

        if previous is not None and previous != reachable:
            logger.info("Network became %s", "reachable" if reachable else "unreachable")
            for callback in subscribers:
                try:
                    callback(reachable)
                except Exception:
                    logger.exception("Reachability subscriber failed")
        return reachable

    def subscribe(self, callback: ReachabilityCallback) -> Unsubscribe:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def start(self) -> None:
        """Start the background polling thread (no-op if already running)."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="reachability-monitor", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.timeout + 1.0)

    def _run(self) -> None:
        while not self._stop.is_set():
            self.check()
            self._stop.wait(self.interval)
