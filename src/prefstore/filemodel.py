"""In-memory model of a settings file.

A settings file is a list of ``id = value`` lines. Any other line is
kept as an opaque comment, so a file written by hand, or by a newer
version of the application, survives a load/save cycle unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

from prefstore.constants import ENTRY_LINE_PATTERN

logger: Final = logging.getLogger(__name__)


@dataclass
class FileEntry:
    """One parsed ``id = value`` line. The value is raw, untyped text."""

    setting_id: str
    value: str

    def render(self) -> str:
        return f"{self.setting_id} = {self.value}\n"


@dataclass(frozen=True)
class CommentLine:
    """A line that is not an entry, kept verbatim with a trailing newline."""

    text: str

    def render(self) -> str:
        return self.text


FileLine = FileEntry | CommentLine


def strip_line_terminator(line: str) -> str:
    """Remove one trailing ``\\n``, ``\\r\\n`` or ``\\r``."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


class SettingsFileModel:
    """Ordered file lines plus an index of entries by identifier.

    ``_lines`` holds entries and comments in file order. ``_index`` maps
    each identifier to the entry object inside ``_lines``, so updating an
    entry through the index updates it in place. Every mutation goes
    through ``add_entry``, ``add_comment`` or ``upsert``, which keep the
    two in step.

    If a file repeats an identifier, both lines are kept and the index
    points at the later one.
    """

    def __init__(self) -> None:
        self._lines: list[FileLine] = []
        self._index: dict[str, FileEntry] = {}

    # ---- construction ----
    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> SettingsFileModel:
        """Build a model from raw file lines, terminators included or not."""
        model = cls()
        for line in lines:
            model.parse_line(line)
        return model

    def parse_line(self, line: str) -> FileLine:
        """Classify one raw line and append it to the model.

        Args:
            line: Line as read from the file

        Returns:
            The FileEntry or CommentLine that was appended
        """
        body = strip_line_terminator(line)
        match = ENTRY_LINE_PATTERN.match(body)
        if match is None:
            return self.add_comment(body)
        return self.add_entry(match.group(1), match.group(2))

    # ---- mutation ----
    def add_entry(self, setting_id: str, value: str) -> FileEntry:
        """Append a new entry and point the index at it."""
        if setting_id in self._index:
            logger.warning("Setting %s appears more than once; the last one wins", setting_id)
        entry = FileEntry(setting_id, value)
        self._lines.append(entry)
        self._index[setting_id] = entry
        return entry

    def add_comment(self, raw_line: str) -> CommentLine:
        """Append a comment line, adding a newline if it has none."""
        text = raw_line if raw_line.endswith("\n") else raw_line + "\n"
        comment = CommentLine(text)
        self._lines.append(comment)
        return comment

    def upsert(self, setting_id: str, value: str) -> FileEntry:
        """Update an entry where it stands, or append it if it is new.

        Keeping existing entries in their original position keeps the
        diff against the previous file as small as possible.
        """
        entry = self._index.get(setting_id)
        if entry is None:
            return self.add_entry(setting_id, value)
        entry.value = value
        return entry

    # ---- queries ----
    def lookup(self, setting_id: str) -> str | None:
        """Return the raw value for an identifier, or None if absent."""
        entry = self._index.get(setting_id)
        return entry.value if entry is not None else None

    def entries(self) -> Iterator[FileEntry]:
        """Iterate entries in file order."""
        return (line for line in self._lines if isinstance(line, FileEntry))

    def serialize(self) -> list[str]:
        """Render every line in order, each ending with a newline."""
        return [line.render() for line in self._lines]

    def __contains__(self, setting_id: object) -> bool:
        return setting_id in self._index

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[FileLine]:
        return iter(self._lines)
