"""Byte sources that supply raw .po data to a Locale.

Defines the contract for fetching catalog bytes and provides filesystem
and in-memory implementations.
"""

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Dict, Mapping, Optional, Union

from pogettext.core.logging import get_module_logger
from pogettext.i18n.errors import SourceNotFoundError

logger = get_module_logger()


class Source(ABC):
    """Abstract base for byte sources.

    Identifiers are ``/``-separated relative names such as
    ``"fr/LC_MESSAGES/default.po"``; how they map to storage is up to the
    implementation.
    """

    @abstractmethod
    def read_file(self, name: str) -> bytes:
        """Return the bytes stored under ``name``.

        Args:
            name: Relative identifier of the file.

        Returns:
            Raw file content.

        Raises:
            SourceNotFoundError: If nothing is stored under ``name``.
        """
        pass


class FileSystemSource(Source):
    """Reads files relative to a root directory.

    Attributes:
        root: Directory identifiers are resolved against.
    """

    def __init__(self, root: Union[str, Path] = "."):
        """Initialize filesystem source.

        Args:
            root: Base directory (default: current working directory).
        """
        self.root = Path(root)

    def read_file(self, name: str) -> bytes:
        path = self.root.joinpath(*PurePosixPath(name).parts)
        try:
            return path.read_bytes()
        except OSError as e:
            raise SourceNotFoundError(f"Failed to read {path}: {e}") from e

    def __repr__(self) -> str:
        return f"FileSystemSource(root={str(self.root)!r})"


class MemorySource(Source):
    """Serves files from an in-memory mapping.

    Useful for catalogs bundled as package data or built in tests.
    Text values are encoded as UTF-8.
    """

    def __init__(self, files: Optional[Mapping[str, Union[bytes, str]]] = None):
        self._files: Dict[str, bytes] = {}
        for name, content in (files or {}).items():
            self.add_file(name, content)

    def add_file(self, name: str, content: Union[bytes, str]) -> None:
        """Store ``content`` under ``name``, replacing any previous value."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._files[str(PurePosixPath(name))] = content

    def read_file(self, name: str) -> bytes:
        try:
            return self._files[str(PurePosixPath(name))]
        except KeyError:
            logger.debug("memory_source_miss", name=name)
            raise SourceNotFoundError(f"No file named {name!r} in memory source") from None

    def __repr__(self) -> str:
        return f"MemorySource(files={sorted(self._files)!r})"
