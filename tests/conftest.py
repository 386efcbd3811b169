
import io
import lzma
import tarfile
import pytest
from typing import List, Optional, Sequence, Tuple

from logviewer.core.host import CANCEL, HostSurface


class RecordingHost(HostSurface):
    """Host surface that records everything and answers prompts from a script."""

    def __init__(self, answers: Optional[List[str]] = None):
        self.answers = list(answers or [])
        self.shown: List[Tuple[str, str]] = []
        self.prompts: List[str] = []
        self.notices: List[str] = []
        self.errors: List[str] = []

    async def show(self, title: str, text: str) -> str:
        self.shown.append((title, text))
        return f"view-{len(self.shown)}"

    async def confirm(self, message: str, options: Sequence[str]) -> Optional[str]:
        self.prompts.append(message)
        return self.answers.pop(0) if self.answers else CANCEL

    async def notify(self, message: str) -> None:
        self.notices.append(message)

    async def notify_error(self, message: str) -> None:
        self.errors.append(message)


def build_tar(entries: List[Tuple[str, bytes]]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w", format=tarfile.USTAR_FORMAT) as tar:
        for name, content in entries:
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


@pytest.fixture
def make_host():
    return RecordingHost


@pytest.fixture
def tar_bytes():
    return build_tar


@pytest.fixture
def write_xz(tmp_path):
    def _write(name: str, data: bytes):
        path = tmp_path / name
        path.write_bytes(lzma.compress(data))
        return path
    return _write


@pytest.fixture
def write_tar_xz(tmp_path):
    def _write(name: str, entries: List[Tuple[str, bytes]]):
        path = tmp_path / name
        path.write_bytes(lzma.compress(build_tar(entries)))
        return path
    return _write
