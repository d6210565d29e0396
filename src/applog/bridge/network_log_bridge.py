from typing import Callable, Optional

NETWORK_LOG_SENTINEL = "applog"


class NetworkLogBridge:
    """
    Tells an external subsystem (typically the network transport) whether
    it should emit its own verbose logs.

    The subsystem is a callable taking one string:
      - NETWORK_LOG_SENTINEL  -> turn verbose logging on
      - ""                    -> turn it off
    """

    def __init__(
        self,
        subsystem: Optional[Callable[[str], None]] = None,
        *,
        logger: Optional[Callable[[str], None]] = None,
    ):
        self._subsystem = subsystem
        self._log = logger or (lambda s: None)
        self._last: Optional[bool] = None

    def attach(self, subsystem: Optional[Callable[[str], None]]) -> None:
        self._subsystem = subsystem
        self._last = None

    @property
    def last_state(self) -> Optional[bool]:
        return self._last

    def notify(self, enabled: bool) -> None:
        self._last = bool(enabled)
        if self._subsystem is None:
            return

        value = NETWORK_LOG_SENTINEL if enabled else ""
        try:
            self._subsystem(value)
        except Exception as e:
            # The bridged subsystem must never break the caller
            self._log(f"[NetworkLogBridge] subsystem failed: {e!r}")
