
from dataclasses import dataclass
from typing import Optional


@dataclass
class Artifact:
    name: str
    path: str
    size: int
    mtime: float
    kind: str  # SourceKind value, e.g. "container"


@dataclass
class ArtifactDetails(Artifact):
    hash: Optional[str] = None
