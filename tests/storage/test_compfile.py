"""Tests for comparison file encoding, versioning and migration.

Critical Invariants:
- Files are written in the current schema and read back unchanged, for any
  f32 trigger pose and u64 segment time
- Legacy 0.4 files (no header) migrate to single-segment paths
- Unknown versions and trailing bytes are decode errors
- Failed writes are retried, then reported as FileIOError
"""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pathcomp.core.geometry import BoxCollider
from pathcomp.core.path import Path, PathCollection
from pathcomp.storage import (
    CURRENT_FILE_VERSION,
    CompFile,
    DecodeError,
    FileIOError,
    OldPath,
    OldPathCollection,
    RetryPolicy,
    encode_v04,
)
from pathcomp.storage.codec import BinaryWriter

START = ((0.0, 1.0, 0.0), (0.0, 0.5, 0.0), (1.0, 1.0, 1.0))
END = ((10.0, 1.0, 0.0), (0.0, 0.0, 0.0), (2.0, 1.0, 2.0))
NO_RETRY = RetryPolicy(max_attempts=1, backoff="none")


@pytest.fixture
def comp():
    path = Path()
    path.add_node((1.0, 2.0, 3.0))
    path.end_segment(250)
    path.add_node((4.0, 5.0, 6.0))
    path.add_node((7.0, 8.0, 9.0))
    path.end_path(750)

    collection = PathCollection("Route A", paths=[path])
    return CompFile.new(
        (BoxCollider(*START), BoxCollider(*END)),
        [collection, PathCollection("Empty")],
    )


def test_round_trip_preserves_everything(comp):
    loaded = CompFile.from_bytes(comp.to_bytes())

    assert loaded.version == CURRENT_FILE_VERSION
    assert loaded.trigger_data == (START, END)
    assert [c.name for c in loaded.collections] == ["Route A", "Empty"]
    assert [c.id for c in loaded.collections] == [c.id for c in comp.collections]

    written = comp.collections[0].paths[0]
    path = loaded.collections[0].paths[0]
    assert path.id == written.id
    assert path.times == [250, 750]
    assert path.segments == [[(1.0, 2.0, 3.0)], [(4.0, 5.0, 6.0), (7.0, 8.0, 9.0)]]


coords = st.floats(width=32, allow_nan=False, allow_infinity=False)
vec3s = st.tuples(coords, coords, coords)
poses = st.tuples(vec3s, vec3s, vec3s)


@st.composite
def recorded_path(draw):
    segments = draw(st.lists(st.lists(vec3s, max_size=4), min_size=1, max_size=3))
    times = draw(
        st.lists(
            st.integers(min_value=0, max_value=2**64 - 1),
            min_size=len(segments),
            max_size=len(segments),
        )
    )
    return Path(times=times, segments=segments)


@given(start=poses, end=poses, paths=st.lists(recorded_path(), max_size=3))
def test_round_trip_any_poses_and_times(start, end, paths):
    comp = CompFile(trigger_data=(start, end), collections=[PathCollection("Route", paths=paths)])

    loaded = CompFile.from_bytes(comp.to_bytes())

    assert loaded.trigger_data == (start, end)
    restored = loaded.collections[0].paths
    assert [p.id for p in restored] == [p.id for p in paths]
    assert [p.times for p in restored] == [p.times for p in paths]
    assert [p.segments for p in restored] == [p.segments for p in paths]



def test_file_starts_with_version_envelope(comp):
    data = comp.to_bytes()

    assert data.startswith(b"\x07\x00\x00\x00version\x03\x00\x00\x000.5")


def test_get_triggers_builds_fresh_colliders(comp):
    start, end = comp.get_triggers()

    assert start.snapshot() == START
    assert end.snapshot() == END
    assert start.check_point_collision((0.0, 1.0, 0.0))


def test_legacy_file_is_migrated():
    """CRITICAL: 0.4 files load as one segment with one duration per path."""
    old_path = OldPath(id=uuid4(), time=1234, nodes=[(1.0, 0.0, 0.0), (2.0, 0.0, 0.0)])
    old_collection = OldPathCollection(id=uuid4(), name="Legacy", paths=[old_path])

    loaded = CompFile.from_bytes(encode_v04((START, END), [old_collection]))

    assert loaded.version == CURRENT_FILE_VERSION
    assert loaded.trigger_data == (START, END)
    collection = loaded.collections[0]
    assert collection.id == old_collection.id
    assert collection.name == "Legacy"
    path = collection.paths[0]
    assert path.id == old_path.id
    assert path.times == [1234]
    assert path.segments == [[(1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]]
    assert path.time() == 1234


def test_legacy_file_reencodes_as_current():
    old = OldPathCollection(id=uuid4(), name="Legacy", paths=[])
    loaded = CompFile.from_bytes(encode_v04((START, END), [old]))

    assert CompFile.from_bytes(loaded.to_bytes()).collections[0].id == old.id


def test_unknown_version_rejected():
    writer = BinaryWriter()
    writer.string("version")
    writer.string("9.9")

    with pytest.raises(DecodeError, match="Version 9.9 not compatible"):
        CompFile.from_bytes(writer.getvalue())


def test_trailing_bytes_rejected(comp):
    with pytest.raises(DecodeError):
        CompFile.from_bytes(comp.to_bytes() + b"\x00")


def test_truncated_file_rejected(comp):
    with pytest.raises(DecodeError):
        CompFile.from_bytes(comp.to_bytes()[:-3])


def test_garbage_rejected():
    with pytest.raises(DecodeError):
        CompFile.from_bytes(b"not a comparison file")


# File IO


def test_to_file_and_from_file(tmp_path, comp):
    target = tmp_path / "route.ccmp"
    comp.to_file(str(target), NO_RETRY)

    loaded = CompFile.from_file(str(target))
    assert loaded.collections[0].paths[0].time() == 1000


def test_from_file_missing_raises_io_error(tmp_path):
    with pytest.raises(FileIOError) as exc_info:
        CompFile.from_file(str(tmp_path / "missing.ccmp"))

    assert exc_info.value.path.endswith("missing.ccmp")
    assert isinstance(exc_info.value.cause, OSError)


def test_to_file_retries_then_raises(tmp_path, comp, monkeypatch):
    """Transient write failures are retried up to max_attempts."""
    attempts = []

    def failing_write(self, data):
        attempts.append(self)
        raise PermissionError("locked")

    monkeypatch.setattr("pathlib.Path.write_bytes", failing_write)

    with pytest.raises(FileIOError, match="locked"):
        comp.to_file(str(tmp_path / "x.ccmp"), RetryPolicy(max_attempts=3, backoff="none"))
    assert len(attempts) == 3


def test_to_file_succeeds_after_transient_failure(tmp_path, comp, monkeypatch):
    import pathlib

    real_write = pathlib.Path.write_bytes
    calls = []

    def flaky_write(self, data):
        calls.append(self)
        if len(calls) == 1:
            raise OSError("busy")
        return real_write(self, data)

    monkeypatch.setattr("pathlib.Path.write_bytes", flaky_write)
    target = tmp_path / "x.ccmp"

    comp.to_file(str(target), RetryPolicy(max_attempts=2, backoff="linear", base_delay=0.0))

    assert len(calls) == 2
    assert CompFile.from_file(str(target)).collections[0].name == "Route A"
