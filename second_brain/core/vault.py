"""
Note sources. A vault lists markdown notes and reads their text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List

from ..util.logging import logger


@dataclass(frozen=True)
class Note:
    """Handle to a note in a vault."""

    path: str
    """Vault-relative POSIX path, used as the index identifier"""

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".").lower()


class IVault(ABC):
    """Abstract interface for a collection of notes."""

    @abstractmethod
    def get_markdown_files(self) -> List[Note]:
        """List every markdown note."""
        pass

    @abstractmethod
    def read(self, note: Note) -> str:
        """Return the text of a note."""
        pass


class FileSystemVault(IVault):
    """Vault backed by a directory tree of .md files."""

    def __init__(self, root):
        self.root = Path(root)

    def note_for(self, path) -> Note:
        """Build a Note handle for an absolute or vault-relative path."""
        path = Path(path)
        if path.is_absolute():
            path = path.relative_to(self.root)
        return Note(path=path.as_posix())

    def get_markdown_files(self) -> List[Note]:
        if not self.root.is_dir():
            logger.warning(f"Vault directory not found: {self.root}")
            return []
        return [
            self.note_for(p)
            for p in sorted(self.root.rglob("*.md"))
            if p.is_file()
        ]

    def read(self, note: Note) -> str:
        """Read a note as UTF-8. Unreadable notes yield empty text."""
        try:
            return (self.root / note.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read note {note.path}: {e}")
            return ""


class InMemoryVault(IVault):
    """Vault held in a dict of path -> text."""

    def __init__(self, notes=None):
        self.notes = dict(notes or {})

    def get_markdown_files(self) -> List[Note]:
        return [Note(path=p) for p in self.notes if Note(path=p).extension == "md"]

    def read(self, note: Note) -> str:
        return self.notes.get(note.path, "")
