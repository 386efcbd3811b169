
import io
import logging
import tarfile
from typing import Iterator, List

from logviewer.core.decoders.models import ArchiveEntry
from logviewer.core.errors import ExtractionError

logger = logging.getLogger(__name__)


class TarReader:
    """
    Sequential reader for tar containers that are already fully decoded in memory.

    Members are yielded in stream order. Each member body is read to completion
    before the next header is parsed, because the stream cursor is shared.
    """

    def iter_entries(self, buffer: bytes) -> Iterator[ArchiveEntry]:
        # A container that decodes to nothing holds no entries
        if not buffer:
            return

        try:
            archive = tarfile.open(fileobj=io.BytesIO(buffer), mode="r|")
        except tarfile.TarError as e:
            raise ExtractionError(f"Not a valid tar container: {e}") from e

        with archive:
            index = 0
            while True:
                try:
                    member = archive.next()
                except tarfile.TarError as e:
                    raise ExtractionError(f"Malformed tar entry #{index}: {e}") from e
                if member is None:
                    break

                yield ArchiveEntry(name=member.name, index=index, content=self._read_member(archive, member))
                index += 1

            self._check_trailer(buffer, archive.offset, index)

    def extract_entries(self, buffer: bytes) -> List[ArchiveEntry]:
        return list(self.iter_entries(buffer))

    @staticmethod
    def _read_member(archive: tarfile.TarFile, member: tarfile.TarInfo) -> bytes:
        # Directories, links and devices carry no body
        if not member.isfile():
            return b""
        try:
            stream = archive.extractfile(member)
            return stream.read() if stream else b""
        except tarfile.TarError as e:
            raise ExtractionError(f"Truncated body for entry '{member.name}': {e}") from e

    @staticmethod
    def _check_trailer(buffer: bytes, offset: int, count: int):
        """
        tarfile stops quietly on a broken header after the first member.
        The block where parsing stopped must be the zero end-of-archive marker;
        anything after that marker is ignored, as tar itself does.
        """
        block = buffer[offset:offset + tarfile.BLOCKSIZE]
        if not block:
            if count:
                logger.warning(f"Tar container has no end-of-archive marker after {count} entries")
            return
        if block.strip(b"\0"):
            raise ExtractionError(f"Malformed or truncated entry header at offset {offset}")
