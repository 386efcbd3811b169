
import os
import hashlib
import logging
import streamlit as st
from pathlib import Path
from typing import List, Optional

from logviewer.core.decoders.models import classify
from logviewer.core.errors import UnsupportedSourceError
from logviewer.models.artifacts import Artifact, ArtifactDetails

logger = logging.getLogger(__name__)


@st.cache_data(ttl=5)
def list_artifacts(browse_dir: str, search_term: Optional[str] = None) -> List[Artifact]:
    """
    Lists .xz and .tar.xz files in browse_dir (non-recursive).
    Cached for performance (TTL 5s).
    """
    artifacts = []

    if not browse_dir or not os.path.exists(browse_dir):
        return []

    try:
        for entry in os.scandir(browse_dir):
            if not entry.is_file():
                continue
            try:
                kind = classify(entry.name)
            except UnsupportedSourceError:
                continue

            if search_term and search_term.lower() not in entry.name.lower():
                continue

            stats = entry.stat()
            artifacts.append(Artifact(
                name=entry.name,
                path=entry.path,
                size=stats.st_size,
                mtime=stats.st_mtime,
                kind=kind.value
            ))
    except OSError as e:
        logger.error(f"Error listing artifacts in {browse_dir}: {e}")
        return []

    # Default sort: mtime desc, name asc
    artifacts.sort(key=lambda x: (-x.mtime, x.name))
    return artifacts


def get_artifact_details(path: str, compute_hash: bool = False) -> ArtifactDetails:
    """
    Metadata for one compressed artifact. The SHA-256 of the compressed file
    is only computed on request.
    """
    path_obj = Path(path)
    stats = path_obj.stat()

    digest = None
    if compute_hash:
        sha256_hash = hashlib.sha256()
        with open(path, "rb") as f:
            for byte_block in iter(lambda: f.read(65536), b""):
                sha256_hash.update(byte_block)
        digest = sha256_hash.hexdigest()

    return ArtifactDetails(
        name=path_obj.name,
        path=str(path_obj),
        size=stats.st_size,
        mtime=stats.st_mtime,
        kind=classify(path_obj).value,
        hash=digest
    )
