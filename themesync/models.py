"""Data models for themes and file change events."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

FileContents = Union[bytes, BinaryIO, None]

CLIENT_FACING_MARKERS = ("production", "staging")


@dataclass(frozen=True)
class Theme:
    """A theme as returned by the remote theme list."""

    id: int
    """Numeric theme id"""

    name: str
    """Theme name shown in the admin"""

    role: str = ""
    """Role such as ``main``, ``unpublished`` or ``demo`` (may be empty)"""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Theme":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            role=data.get("role") or "",
        )

    @property
    def display_name(self) -> str:
        """Format as ``<id> - <name>[ (<role>)]`` for selection prompts."""
        label = f"{self.id} - {self.name}"
        if self.role:
            label = f"{label} ({self.role})"
        return label

    @property
    def is_client_facing(self) -> bool:
        """True when the name suggests a production or staging theme."""
        lowered = self.name.lower()
        return any(marker in lowered for marker in CLIENT_FACING_MARKERS)


@dataclass
class FileEvent:
    """A single file change delivered by an event source.

    ``contents`` is the full file content for created or modified files,
    ``None`` for deleted files, and a readable stream for sources that
    do not materialize content (which the sync engine rejects).
    """

    path: Path
    """Absolute path of the changed file"""

    base: Path
    """Directory the event source watches; ``relative`` is computed from it"""

    contents: FileContents = None

    @property
    def relative(self) -> str:
        return os.path.relpath(self.path, self.base)

    def is_buffer(self) -> bool:
        return isinstance(self.contents, (bytes, bytearray))

    def is_null(self) -> bool:
        return self.contents is None

    def is_stream(self) -> bool:
        return hasattr(self.contents, "read")

    @classmethod
    def from_path(
        cls, path: Union[str, Path], base: Union[str, Path]
    ) -> "FileEvent":
        """Create a buffered event by reading the file at ``path``."""
        file_path = Path(path).absolute()
        return cls(
            path=file_path,
            base=Path(base).absolute(),
            contents=file_path.read_bytes(),
        )

    @classmethod
    def deleted(cls, path: Union[str, Path], base: Union[str, Path]) -> "FileEvent":
        """Create a null event for a file that no longer exists."""
        return cls(path=Path(path).absolute(), base=Path(base).absolute())


@dataclass
class OperationResult:
    """Outcome of one upload or delete call."""

    action: str
    """``upload`` or ``delete``"""

    key: Optional[str]
    """Asset key, or None when the key could not be computed"""

    success: bool
    error: Optional[str] = None
