import threading
import time
from unittest.mock import MagicMock

import zmq

from src.applog.bridge import zmq_socket_monitor
from src.applog.bridge.network_log_bridge import NETWORK_LOG_SENTINEL, NetworkLogBridge
from src.applog.bridge.zmq_socket_monitor import SocketMonitorSubsystem, describe_event


def test_bridge_sends_sentinel_and_empty_value() -> None:
    values = []
    bridge = NetworkLogBridge(values.append)
    bridge.notify(True)
    bridge.notify(False)
    assert values == [NETWORK_LOG_SENTINEL, ""]
    assert NETWORK_LOG_SENTINEL
    assert bridge.last_state is False


def test_bridge_without_subsystem_is_noop() -> None:
    bridge = NetworkLogBridge()
    bridge.notify(True)
    assert bridge.last_state is True


def test_bridge_swallows_subsystem_errors() -> None:
    messages = []
    bridge = NetworkLogBridge(MagicMock(side_effect=OSError("boom")), logger=messages.append)
    bridge.notify(True)
    assert messages and "boom" in messages[0]


def test_describe_event() -> None:
    line = describe_event({"event": zmq.EVENT_CONNECTED, "value": 12, "endpoint": b"tcp://localhost:6001"})
    assert line == "EVENT_CONNECTED tcp://localhost:6001 (12)"


class FakePoller:
    """Reports the monitor socket readable once per queued event."""

    def __init__(self, ready: list):
        self._ready = ready

    def register(self, sock, flags):
        self.sock = sock

    def poll(self, timeout_ms):
        if self._ready:
            self._ready.pop(0)
            return [(self.sock, zmq.POLLIN)]
        time.sleep(timeout_ms / 1000.0)
        return []


def test_socket_monitor_toggled_by_bridge(monkeypatch) -> None:
    events = [{"event": zmq.EVENT_LISTENING, "value": 7, "endpoint": b"tcp://127.0.0.1:6001"}]
    monkeypatch.setattr(zmq_socket_monitor.zmq, "Poller", lambda: FakePoller([True]))
    monkeypatch.setattr(zmq_socket_monitor, "recv_monitor_message", lambda sock: events.pop(0))

    emitted = []
    got_event = threading.Event()

    def emit(line: str) -> None:
        emitted.append(line)
        got_event.set()

    sock = MagicMock()
    monitor = SocketMonitorSubsystem(sock, emit, poll_timeout_ms=5)
    bridge = NetworkLogBridge(monitor)

    bridge.notify(True)
    assert monitor.active
    sock.get_monitor_socket.assert_called_once()
    assert got_event.wait(2.0)
    assert emitted == ["EVENT_LISTENING tcp://127.0.0.1:6001 (7)"]

    monitor_sock = sock.get_monitor_socket.return_value
    bridge.notify(False)
    assert not monitor.active
    sock.disable_monitor.assert_called_once()
    monitor_sock.close.assert_called_once_with(linger=0)


def test_socket_monitor_start_is_idempotent(monkeypatch) -> None:
    monkeypatch.setattr(zmq_socket_monitor.zmq, "Poller", lambda: FakePoller([]))
    sock = MagicMock()
    monitor = SocketMonitorSubsystem(sock, lambda line: None, poll_timeout_ms=5)

    monitor(NETWORK_LOG_SENTINEL)
    monitor(NETWORK_LOG_SENTINEL)
    assert sock.get_monitor_socket.call_count == 1

    monitor("")
    monitor("")
    assert sock.disable_monitor.call_count == 1
