
import pytest
from pathlib import Path
from logviewer.core.errors import ArtifactIOError, UserCancelled
from logviewer.core.host import PROCEED
from logviewer.core.materialization import (
    DEFAULT_THRESHOLD_BYTES,
    Inline,
    MaterializationPolicy,
    OffloadRequired,
    decide,
    offload,
    suggested_output_path,
)


def test_default_threshold_is_50_mib():
    assert DEFAULT_THRESHOLD_BYTES == 52_428_800
    assert MaterializationPolicy().threshold_bytes == 52_428_800


def test_boundary_equal_is_inline():
    assert isinstance(decide(1000, 1000, "/var/log/app.log.xz"), Inline)


def test_boundary_plus_one_is_offload():
    decision = decide(1001, 1000, "/var/log/app.log.xz")
    assert isinstance(decision, OffloadRequired)
    assert decision.byte_length == 1001


def test_threshold_is_caller_configured():
    policy = MaterializationPolicy(threshold_bytes=10)
    assert isinstance(policy.decide(10, "a.xz"), Inline)
    assert isinstance(policy.decide(11, "a.xz"), OffloadRequired)


def test_invalid_threshold_rejected():
    with pytest.raises(ValueError):
        MaterializationPolicy(-1)
    with pytest.raises(ValueError):
        MaterializationPolicy(True)


def test_suggested_path_strips_exactly_the_suffix():
    decision = decide(DEFAULT_THRESHOLD_BYTES + 1, DEFAULT_THRESHOLD_BYTES, "/var/log/app.log.xz")
    assert decision.suggested_path == Path("/var/log/app.log")


def test_suggested_path_for_container_keeps_tar():
    assert suggested_output_path("/data/logs.tar.xz") == Path("/data/logs.tar")
    assert suggested_output_path("/data/LOGS.XZ") == Path("/data/LOGS")


def test_size_mb_rounds_to_whole_megabytes():
    assert OffloadRequired(byte_length=52_428_801, suggested_path=Path("x")).size_mb == 50
    assert OffloadRequired(byte_length=int(75.6 * 1024 * 1024), suggested_path=Path("x")).size_mb == 76


@pytest.mark.asyncio
async def test_offload_writes_new_file(tmp_path, make_host):
    host = make_host()
    target = tmp_path / "app.log"

    written = await offload(b"decoded bytes", target, host)

    assert written == target
    assert target.read_bytes() == b"decoded bytes"
    assert host.prompts == []


@pytest.mark.asyncio
async def test_overwrite_refusal_leaves_file_unchanged(tmp_path, make_host):
    host = make_host(answers=["Cancel"])
    target = tmp_path / "app.log"
    target.write_bytes(b"original contents")

    with pytest.raises(UserCancelled):
        await offload(b"new contents", target, host)

    assert target.read_bytes() == b"original contents"
    assert len(host.prompts) == 1
    assert "already exists" in host.prompts[0]


@pytest.mark.asyncio
async def test_overwrite_with_consent(tmp_path, make_host):
    host = make_host(answers=[PROCEED])
    target = tmp_path / "app.log"
    target.write_bytes(b"old")

    await offload(b"new", target, host)

    assert target.read_bytes() == b"new"


@pytest.mark.asyncio
async def test_none_answer_counts_as_cancel(tmp_path, make_host):
    host = make_host()
    host.answers = [None]
    target = tmp_path / "app.log"
    target.write_bytes(b"old")

    with pytest.raises(UserCancelled):
        await offload(b"new", target, host)


@pytest.mark.asyncio
async def test_write_failure_is_io_error(tmp_path, make_host):
    target = tmp_path / "missing_dir" / "app.log"

    with pytest.raises(ArtifactIOError) as exc:
        await offload(b"data", target, make_host())

    assert exc.value.operation == "write"
    assert isinstance(exc.value.__cause__, OSError)
