
import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import anyio
from anyio import to_thread

from logviewer.core.bindings import ViewBinding, ViewBindingRegistry
from logviewer.core.decoders.assembler import ContentAssembler
from logviewer.core.decoders.models import SourceKind, classify
from logviewer.core.errors import ArtifactIOError, LogViewerError, UserCancelled
from logviewer.core.host import CANCEL, PROCEED, HostSurface
from logviewer.core.materialization import Inline, MaterializationPolicy, OffloadRequired, offload
from logviewer.core.settings import ViewerSettings

logger = logging.getLogger(__name__)


class PipelineState(str, enum.Enum):
    IDLE = "idle"
    DECOMPRESSING = "decompressing"
    EXTRACTING = "extracting"
    ASSEMBLED = "assembled"
    INLINE = "inline"
    DISPLAYED = "displayed"
    OFFLOAD_PENDING = "offload_pending"
    OFFLOADED = "offloaded"
    REFUSED = "refused"
    ERROR = "error"
    CLOSED = "closed"


@dataclass
class PipelineResult:
    source_path: str
    kind: Optional[SourceKind] = None
    states: List[PipelineState] = field(default_factory=lambda: [PipelineState.IDLE])
    decision: Optional[Union[Inline, OffloadRequired]] = None
    view_id: Optional[str] = None
    output_path: Optional[Path] = None
    cancelled: bool = False

    def advance(self, state: PipelineState):
        self.states.append(state)

    @property
    def final_state(self) -> PipelineState:
        # The last state before CLOSED tells how the invocation ended
        meaningful = [s for s in self.states if s is not PipelineState.CLOSED]
        return meaningful[-1]


def format_error(kind: Optional[SourceKind], error: Exception) -> str:
    label = kind.label if kind else "XZ"
    return f"Error processing {label} file: {error}"


class DecodePipeline:
    """
    One decode-and-materialize run per call to open().

    Idle -> Decompressing -> [Extracting] -> Assembled, then either
    Inline -> Displayed or OffloadPending -> Offloaded | Refused.
    Any failure goes to Error. The view binding is closed on every path.
    Errors are reported to the host and re-raised unchanged; there is no retry.
    """

    def __init__(
        self,
        host: HostSurface,
        settings: Optional[ViewerSettings] = None,
        registry: Optional[ViewBindingRegistry] = None,
        assembler: Optional[ContentAssembler] = None,
    ):
        self.host = host
        self.settings = settings or ViewerSettings()
        self.registry = registry or ViewBindingRegistry()
        self.assembler = assembler or ContentAssembler(self.settings.binary_entries)
        self.policy = MaterializationPolicy(self.settings.threshold_bytes)

    async def open(self, path: Union[str, Path]) -> PipelineResult:
        source = Path(path)
        result = PipelineResult(source_path=str(source))
        logger.info(f"Opening: {source}")

        try:
            result.kind = classify(source)
            async with self.registry.bind(str(source)) as binding:
                await self._run(source, binding, result)
        except UserCancelled as e:
            result.advance(PipelineState.REFUSED)
            result.cancelled = True
            logger.info(f"Cancelled: {e}")
        except LogViewerError as e:
            result.advance(PipelineState.ERROR)
            logger.error(f"Error opening {source}: {e}")
            await self.host.notify_error(format_error(result.kind, e))
            raise
        except Exception as e:
            # A host or library fault still ends the run in Error
            result.advance(PipelineState.ERROR)
            logger.exception(f"Unexpected failure opening {source}")
            await self.host.notify_error(format_error(result.kind, e))
            raise
        finally:
            result.advance(PipelineState.CLOSED)

        return result

    async def _run(self, source: Path, binding: ViewBinding, result: PipelineResult):
        result.advance(PipelineState.DECOMPRESSING)
        compressed = await self._read_source(source)
        decoded = await self.assembler.decode(compressed)

        decision = self.policy.decide(len(decoded), source)
        result.decision = decision

        if isinstance(decision, OffloadRequired):
            result.advance(PipelineState.ASSEMBLED)
            await self._offload(source, decoded, decision, result)
            return

        if result.kind is SourceKind.CONTAINER:
            result.advance(PipelineState.EXTRACTING)
        content = await to_thread.run_sync(self.assembler.render_text, result.kind, decoded)
        decision.content = content
        result.advance(PipelineState.ASSEMBLED)

        result.advance(PipelineState.INLINE)
        view_id = await self.host.show(source.name, content.text)
        self.registry.mark_open(binding, view_id)
        result.view_id = view_id
        result.advance(PipelineState.DISPLAYED)

    async def _offload(self, source: Path, decoded: bytes, decision: OffloadRequired, result: PipelineResult):
        result.advance(PipelineState.OFFLOAD_PENDING)
        choice = await self.host.confirm(
            f"{source.name} is {decision.size_mb} MB when decompressed, too large to open. "
            f"Decompress it to {decision.suggested_path.name} instead?",
            [PROCEED, CANCEL],
        )
        if choice != PROCEED:
            raise UserCancelled(f"Offload of {source} declined")

        output = await offload(decoded, decision.suggested_path, self.host)
        result.output_path = output
        result.advance(PipelineState.OFFLOADED)
        await self.host.notify(f"Decompressed {source.name} to {output.name} in {output.parent}")

    @staticmethod
    async def _read_source(source: Path) -> bytes:
        try:
            return await anyio.Path(source).read_bytes()
        except OSError as e:
            raise ArtifactIOError(str(source), "read", e.strerror or str(e)) from e
