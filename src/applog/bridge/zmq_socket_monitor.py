"""
Module: zmq_socket_monitor.py
Location: src/applog/bridge/
Version: 0.1.0

Verbose transport logging for pyzmq sockets, switched on and off by the
network log bridge.

Thread ownership model:
  - a non-empty bridge value attaches a socket monitor and starts a thread
  - the thread polls the monitor socket and hands each event to `emit`
  - an empty bridge value stops the thread and disables the monitor
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

import zmq
from zmq.utils.monitor import recv_monitor_message


def describe_event(event: dict) -> str:
    """
    Render a decoded monitor event, e.g.
        "EVENT_CONNECTED tcp://localhost:6001 (12)"
    """
    try:
        name = zmq.Event(event["event"]).name
    except (KeyError, ValueError, AttributeError):
        name = str(event.get("event", "EVENT_UNKNOWN"))
    if not name.startswith("EVENT_"):
        name = f"EVENT_{name}"

    endpoint = event.get("endpoint", b"")
    if isinstance(endpoint, bytes):
        endpoint = endpoint.decode("utf-8", errors="replace")
    return f"{name} {endpoint} ({event.get('value')})"


class SocketMonitorSubsystem:
    """
    Bridged subsystem that reports zmq socket events while network
    logging is enabled.

    Usage:
        monitor = SocketMonitorSubsystem(sock, emit=lambda s: manager.log(s, "network"))
        bridge.attach(monitor)
    """

    def __init__(
        self,
        socket,
        emit: Callable[[str], object],
        *,
        poll_timeout_ms: int = 100,
        logger: Optional[Callable[[str], None]] = None,
    ):
        self._socket = socket
        self._emit = emit
        self._poll_timeout_ms = poll_timeout_ms
        self._log = logger or (lambda s: None)

        self._stop_evt = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._monitor_sock = None

    def __call__(self, value: str) -> None:
        if value:
            self.start()
        else:
            self.stop()

    @property
    def active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.active:
            return
        self._stop_evt.clear()
        self._monitor_sock = self._socket.get_monitor_socket()
        self._thread = threading.Thread(target=self._run, name="SocketMonitor", daemon=True)
        self._thread.start()
        self._log("[SocketMonitor] started")

    def stop(self, join_timeout: float = 2.0) -> None:
        if self._thread is None:
            return
        self._stop_evt.set()
        self._thread.join(timeout=join_timeout)
        self._thread = None
        try:
            self._socket.disable_monitor()
        except zmq.ZMQError as e:
            self._log(f"[SocketMonitor] disable_monitor failed: {e!r}")
        self._log("[SocketMonitor] stopped")

    # --------------------------
    # Monitor thread internals
    # --------------------------

    def _run(self) -> None:
        poller = zmq.Poller()
        poller.register(self._monitor_sock, zmq.POLLIN)
        try:
            while not self._stop_evt.is_set():
                events = dict(poller.poll(self._poll_timeout_ms))
                if self._monitor_sock not in events:
                    continue
                event = recv_monitor_message(self._monitor_sock)
                self._emit(describe_event(event))
                if event.get("event") == zmq.EVENT_MONITOR_STOPPED:
                    break
        except zmq.ZMQError as e:
            self._log(f"[SocketMonitor ERROR] {e!r}")
        finally:
            try:
                self._monitor_sock.close(linger=0)
            except Exception:
                pass
            self._monitor_sock = None
