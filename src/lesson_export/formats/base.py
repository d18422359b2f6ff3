"""Abstract base class for document encoders."""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

TreeT = TypeVar("TreeT")


class ExportTarget(str, Enum):
    """Output document kinds.

    FLOW is the word-processor document, PAGE the print document.
    """

    FLOW = "docx"
    PAGE = "pdf"

    @property
    def extension(self) -> str:
        """File extension including the dot, e.g. ``.docx``."""
        return f".{self.value}"


class FormatHandler(ABC, Generic[TreeT]):
    """Abstract base class for document encoders.

    Each handler serializes one kind of rendered tree to document bytes
    and can write them to disk.
    """

    @property
    @abstractmethod
    def target(self) -> ExportTarget:
        """The export target this handler encodes."""
        ...

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (self.target.extension,)

    @abstractmethod
    def encode(self, tree: TreeT) -> bytes:
        """Serialize a rendered tree to document bytes.

        Args:
            tree: The rendered document tree

        Returns:
            The complete encoded document
        """
        ...

    def write(self, tree: TreeT, path: Path) -> None:
        """Encode a tree and write it to a file.

        Args:
            tree: The rendered document tree
            path: Path to write the output document
        """
        path.write_bytes(self.encode(tree))
