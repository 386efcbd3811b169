
import lzma
import os
import pytest
from logviewer.services import sources_service
from logviewer.models.artifacts import Artifact


@pytest.fixture
def mock_browse_dir(tmp_path):
    (tmp_path / "app.log.xz").write_bytes(lzma.compress(b"Hello World " * 100))
    (tmp_path / "bundle.tar.xz").write_bytes(lzma.compress(b"\0" * 10240))
    (tmp_path / "notes.txt").write_text("not compressed")
    (tmp_path / "old.log.gz").write_bytes(b"\x1f\x8b")
    (tmp_path / "nested.xz").mkdir()
    return str(tmp_path)


def test_list_artifacts_only_xz(mock_browse_dir):
    artifacts = sources_service.list_artifacts(mock_browse_dir)
    assert sorted(a.name for a in artifacts) == ["app.log.xz", "bundle.tar.xz"]
    assert isinstance(artifacts[0], Artifact)


def test_list_artifacts_kind(mock_browse_dir):
    kinds = {a.name: a.kind for a in sources_service.list_artifacts(mock_browse_dir)}
    assert kinds == {"app.log.xz": "single_stream", "bundle.tar.xz": "container"}


def test_list_artifacts_search(mock_browse_dir):
    res = sources_service.list_artifacts(mock_browse_dir, search_term="BUNDLE")
    assert [a.name for a in res] == ["bundle.tar.xz"]


def test_list_artifacts_missing_dir(tmp_path):
    assert sources_service.list_artifacts(str(tmp_path / "nope")) == []


def test_get_artifact_details(mock_browse_dir):
    path = os.path.join(mock_browse_dir, "app.log.xz")

    details = sources_service.get_artifact_details(path)
    assert details.name == "app.log.xz"
    assert details.size > 0
    assert details.hash is None

    with_hash = sources_service.get_artifact_details(path, compute_hash=True)
    assert len(with_hash.hash) == 64


def test_details_summary_for_viewer(mock_browse_dir):
    from logviewer.ui.pages.viewer import details_summary

    path = os.path.join(mock_browse_dir, "app.log.xz")
    summary = details_summary(sources_service.get_artifact_details(path))
    assert summary["kind"] == "single_stream"
    assert "sha256" not in summary

    hashed = details_summary(sources_service.get_artifact_details(path, compute_hash=True))
    assert len(hashed["sha256"]) == 64
