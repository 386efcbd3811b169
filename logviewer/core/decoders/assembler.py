
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from logviewer.core.decoders.models import (
    ArchiveEntry,
    AssembledContent,
    BinaryEntryPolicy,
    SourceKind,
    classify,
)
from logviewer.core.decoders.tar import TarReader
from logviewer.core.decoders.xz import XzDecompressor
from logviewer.core.errors import BinaryEntryError

logger = logging.getLogger(__name__)


def is_binary(content: bytes) -> bool:
    if b"\0" in content:
        return True
    try:
        content.decode("utf-8")
    except UnicodeDecodeError:
        return True
    return False


class ContentAssembler:
    """
    Composes the xz decompressor and the tar reader into displayable content.

    Errors from either stage propagate as raised so callers can tell a bad
    stream (DecompressionError) from a bad container (ExtractionError).
    Invalid UTF-8 is not an error here: it shows up as U+FFFD.
    """

    def __init__(
        self,
        binary_policy: BinaryEntryPolicy = BinaryEntryPolicy.CONCAT,
        decompressor: Optional[XzDecompressor] = None,
        reader: Optional[TarReader] = None,
    ):
        self.binary_policy = BinaryEntryPolicy(binary_policy)
        self.decompressor = decompressor or XzDecompressor()
        self.reader = reader or TarReader()

    def classify(self, path: Union[str, Path]) -> SourceKind:
        return classify(path)

    async def decode(self, compressed: bytes) -> bytes:
        return await self.decompressor.decompress_async(compressed)

    async def assemble(self, path: Union[str, Path], compressed: bytes, as_bytes: bool = False) -> AssembledContent:
        kind = self.classify(path)
        decoded = await self.decode(compressed)
        if as_bytes:
            return AssembledContent(kind=kind, data=decoded)
        return self.render_text(kind, decoded)

    def render_text(self, kind: SourceKind, decoded: bytes) -> AssembledContent:
        if kind is SourceKind.SINGLE_STREAM:
            return AssembledContent(kind=kind, text=decoded.decode("utf-8", errors="replace"))

        entries = self.reader.iter_entries(decoded)
        text, count = self.concat_entries(entries)
        logger.debug(f"Assembled {count} tar entries into {len(text)} characters")
        return AssembledContent(kind=kind, text=text, entry_count=count)

    def concat_entries(self, entries: Iterable[ArchiveEntry]):
        """
        Joins entries in container order with no separator and no name header.
        Each entry is decoded on its own, so a multibyte sequence split
        across two entries becomes replacement characters.
        """
        parts = []
        count = 0
        for entry in entries:
            parts.append(self._entry_text(entry))
            count += 1
        return "".join(parts), count

    def _entry_text(self, entry: ArchiveEntry) -> str:
        if self.binary_policy is not BinaryEntryPolicy.CONCAT and is_binary(entry.content):
            if self.binary_policy is BinaryEntryPolicy.REJECT:
                raise BinaryEntryError(entry.name, len(entry.content))
            return f"[binary entry {entry.name}: {len(entry.content)} bytes]"
        return entry.content.decode("utf-8", errors="replace")
