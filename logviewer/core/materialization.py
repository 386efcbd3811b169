
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import anyio

from logviewer.core.decoders.models import XZ_SUFFIX, AssembledContent
from logviewer.core.errors import ArtifactIOError, UserCancelled
from logviewer.core.host import CANCEL, PROCEED, HostSurface

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_BYTES = 50 * 1024 * 1024  # 52,428,800
MEGABYTE = 1024 * 1024


@dataclass
class Inline:
    content: Optional[AssembledContent] = None


@dataclass(frozen=True)
class OffloadRequired:
    byte_length: int
    suggested_path: Path

    @property
    def size_mb(self) -> int:
        return round(self.byte_length / MEGABYTE)


def suggested_output_path(source_path: Union[str, Path]) -> Path:
    """
    Strips exactly the trailing '.xz' (any case).

    >>> suggested_output_path("/var/log/app.log.xz")
    PosixPath('/var/log/app.log')
    """
    source = Path(source_path)
    if source.name.lower().endswith(XZ_SUFFIX) and len(source.name) > len(XZ_SUFFIX):
        return source.with_name(source.name[: -len(XZ_SUFFIX)])
    return source.with_name(source.name + ".out")


def decide(decoded_length: int, threshold_bytes: int, source_path: Union[str, Path]):
    if decoded_length <= threshold_bytes:
        return Inline()
    return OffloadRequired(byte_length=decoded_length, suggested_path=suggested_output_path(source_path))


class MaterializationPolicy:
    def __init__(self, threshold_bytes: int = DEFAULT_THRESHOLD_BYTES):
        if isinstance(threshold_bytes, bool) or not isinstance(threshold_bytes, int) or threshold_bytes < 0:
            raise ValueError(f"threshold_bytes must be a non-negative integer, got {threshold_bytes!r}")
        self.threshold_bytes = threshold_bytes

    def decide(self, decoded_length: int, source_path: Union[str, Path]):
        decision = decide(decoded_length, self.threshold_bytes, source_path)
        if isinstance(decision, OffloadRequired):
            logger.info(
                f"{source_path}: {decoded_length} bytes exceeds threshold {self.threshold_bytes}, offload required"
            )
        return decision


async def offload(data: bytes, output_path: Union[str, Path], host: HostSurface) -> Path:
    """
    Writes decoded bytes next to the source.

    An existing file is only replaced after explicit overwrite consent;
    refusal raises UserCancelled and leaves the file as it was.
    Write failures become ArtifactIOError and are not retried.
    """
    target = anyio.Path(output_path)

    if await target.exists():
        choice = await host.confirm(
            f"{target.name} already exists. Overwrite it?",
            [PROCEED, CANCEL],
        )
        if choice != PROCEED:
            raise UserCancelled(f"Overwrite of {target} refused")

    try:
        await target.write_bytes(data)
    except OSError as e:
        raise ArtifactIOError(str(target), "write", e.strerror or str(e)) from e

    logger.info(f"Offloaded {len(data)} bytes to {target}")
    return Path(str(target))
