"""Managed-file storage backends.

The settings manager never touches the filesystem directly. It asks a
``ManagedStorage`` for a text handle on the single, application-wide
settings file, which keeps the manager testable and lets hosts without
a writable home directory plug in something else.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import Final, Literal, Protocol, TextIO, runtime_checkable

from prefstore.errors import SettingsUnsupportedError

logger: Final = logging.getLogger(__name__)

OpenMode = Literal["r", "w"]

# Bytes that are not UTF-8 survive a load/save cycle as lone surrogates
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


@runtime_checkable
class ManagedStorage(Protocol):
    """Protocol for the host's managed settings file.

    Implementations return a context manager so the handle is closed on
    every exit path, including errors.
    """

    def open_managed(self, mode: OpenMode) -> AbstractContextManager[TextIO]:
        """Open the managed file for reading or writing.

        Args:
            mode: "r" to read, "w" to replace the contents

        Raises:
            FileNotFoundError: Reading, and the file does not exist yet
            SettingsUnsupportedError: The host cannot provide the file
            OSError: The file exists but cannot be opened
        """
        ...

    def describe(self) -> str:
        """Return a short location string for log and error messages."""
        ...


class LocalFileStorage:
    """Settings file on the local filesystem.

    Writes go to a temporary file next to the target, which replaces the
    target only after every line was written. A failed save leaves the
    previous file untouched.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def describe(self) -> str:
        return str(self.path)

    def _check_supported(self) -> None:
        if self.path.exists() and not self.path.is_file():
            raise SettingsUnsupportedError(
                f"Settings location {self.path} exists but is not a regular file"
            )

    def open_managed(self, mode: OpenMode) -> AbstractContextManager[TextIO]:
        self._check_supported()
        if mode == "r":
            # newline="" keeps terminators as found; the file model strips them
            return self.path.open("r", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="")
        if mode == "w":
            return self._atomic_writer()
        raise ValueError(f"Unsupported mode {mode!r}")

    @contextmanager
    def _atomic_writer(self) -> Iterator[TextIO]:
        # Write next to the real file so a symlinked settings path stays a symlink
        target = self.path.resolve()
        if not target.parent.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
            logger.debug("Created directory: %s", target.parent)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(
                fd, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline=""
            ) as handle:
                yield handle
            # mkstemp creates files as 0600; keep the mode a plain open() would give
            if target.exists():
                shutil.copymode(target, tmp_path)
            else:
                os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


class MemoryStorage:
    """In-memory settings file for testing.

    ``text`` is None while the file does not exist.
    """

    def __init__(self, text: str | None = None) -> None:
        self.text = text
        self.write_calls = 0

    def describe(self) -> str:
        return "<memory>"

    def open_managed(self, mode: OpenMode) -> AbstractContextManager[TextIO]:
        if mode == "r":
            if self.text is None:
                raise FileNotFoundError("memory settings file does not exist")
            return io.StringIO(self.text, newline="")
        if mode == "w":
            return self._writer()
        raise ValueError(f"Unsupported mode {mode!r}")

    @contextmanager
    def _writer(self) -> Iterator[TextIO]:
        buffer = io.StringIO(newline="")
        yield buffer
        # Only a completed write replaces the stored contents
        self.text = buffer.getvalue()
        self.write_calls += 1


class UnsupportedStorage:
    """Storage for hosts that cannot keep a settings file at all."""

    def describe(self) -> str:
        return "<unsupported>"

    def open_managed(self, mode: OpenMode) -> AbstractContextManager[TextIO]:
        raise SettingsUnsupportedError("Managed settings files are not supported on this host")


class _FailingWriter(io.StringIO):
    def __init__(self, fail_after: int) -> None:
        super().__init__(newline="")
        self._remaining = fail_after

    def write(self, s: str) -> int:
        if self._remaining <= 0:
            raise OSError("Simulated write failure")
        self._remaining -= 1
        return super().write(s)


class FailingWriteStorage(MemoryStorage):
    """Memory storage that fails when saving.

    Args:
        text: Initial file contents
        fail_after: Number of successful writes before failing; 0 fails
            on the first write, None fails when opening for write
    """

    def __init__(self, text: str | None = None, fail_after: int | None = None) -> None:
        super().__init__(text)
        self.fail_after = fail_after

    def open_managed(self, mode: OpenMode) -> AbstractContextManager[TextIO]:
        if mode == "w":
            if self.fail_after is None:
                raise PermissionError("Simulated permission denied")
            return self._failing_writer(self.fail_after)
        return super().open_managed(mode)

    @contextmanager
    def _failing_writer(self, fail_after: int) -> Iterator[TextIO]:
        buffer = _FailingWriter(fail_after)
        yield buffer
        self.text = buffer.getvalue()
        self.write_calls += 1
