
import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from logviewer.core.errors import UnsupportedSourceError

XZ_SUFFIX = ".xz"
TAR_XZ_SUFFIX = ".tar.xz"


class SourceKind(str, enum.Enum):
    SINGLE_STREAM = "single_stream"
    CONTAINER = "container"

    @property
    def label(self) -> str:
        # Used in user-facing error messages
        return "TAR.XZ" if self is SourceKind.CONTAINER else "XZ"


class BinaryEntryPolicy(str, enum.Enum):
    CONCAT = "concat"
    PLACEHOLDER = "placeholder"
    REJECT = "reject"


def classify(path: Union[str, Path]) -> SourceKind:
    """
    Classifies a source by its name suffix.
    '.tar.xz' is checked first since every container also ends in '.xz'.
    """
    name = str(path).lower()
    if name.endswith(TAR_XZ_SUFFIX):
        return SourceKind.CONTAINER
    if name.endswith(XZ_SUFFIX):
        return SourceKind.SINGLE_STREAM
    raise UnsupportedSourceError(str(path))


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    index: int
    content: bytes


@dataclass
class AssembledContent:
    kind: SourceKind
    text: Optional[str] = None
    data: Optional[bytes] = None
    entry_count: int = 0

    @property
    def is_text(self) -> bool:
        return self.text is not None
