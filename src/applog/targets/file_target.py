from pathlib import Path
import threading

from src.applog.targets.log_target import TargetKind, TargetSpec
from src.applog.targets.target_exceptions import OpenFailedError, WriteError


class FileTarget:
    """
    Target that appends rendered records to a text file.

    The file is opened for each record and closed again, so the
    handle is never held between writes.
    """

    def __init__(self, spec: TargetSpec):
        if spec.kind != TargetKind.FILE or not spec.path:
            raise ValueError(f"Not a file target: {spec!r}")
        self.spec = spec
        self._path = Path(spec.path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def write(self, text: str) -> None:
        """
        Append one record.

        Raises OpenFailedError when the file cannot be opened for append;
        nothing is written in that case.
        """
        with self._lock:
            try:
                f = open(self._path, "a", encoding="utf-8", newline="")
            except OSError as e:
                raise OpenFailedError(self.spec.raw, f"Can't open file: {e.strerror or e}", details=e) from e

            try:
                f.write(text)
            except OSError as e:
                raise WriteError(self.spec.raw, f"Can't write file: {e.strerror or e}", details=e) from e
            finally:
                try:
                    f.close()
                except OSError:
                    # Close is best-effort
                    pass

    def close(self) -> None:
        pass
