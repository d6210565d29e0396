import sys
import threading

from src.applog.targets.log_target import TargetKind, TargetSpec
from src.applog.targets.target_exceptions import WriteError


def _encodable(text: str, stream) -> str:
    encoding = getattr(stream, "encoding", None) or "ascii"
    return text.encode(encoding, errors="replace").decode(encoding)


class ConsoleTarget:
    """
    Writes each record, followed by a line terminator, to stdout.

    Characters the stream cannot encode are replaced rather than failing
    the write.
    """

    def __init__(self, spec: TargetSpec = TargetSpec(kind=TargetKind.CONSOLE, raw="console"), stream=None):
        self.spec = spec
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        # sys.stdout looked up per call so capture/redirection is honoured
        stream = self._stream or sys.stdout
        if stream is None:
            raise WriteError(self.spec.raw, "No console attached")

        line = text + "\n"
        with self._lock:
            try:
                try:
                    stream.write(line)
                except UnicodeEncodeError:
                    stream.write(_encodable(line, stream))
                stream.flush()
            except (OSError, ValueError) as e:
                raise WriteError(self.spec.raw, "Cannot write to console", details=repr(e)) from e

    def close(self) -> None:
        pass
