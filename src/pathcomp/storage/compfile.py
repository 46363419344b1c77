"""Comparison files: two triggers plus every path collection, on disk.

Files open with an explicit envelope: the string ``"version"`` followed by the
schema version, which selects a decoder from ``DECODERS``. Files written before
the envelope existed (schema 0.4) carry no header and are migrated on load.
Files are always written in the current schema.

Usage:
    comp = CompFile(triggers=(start, end), collections=collections)
    comp.to_file("route.ccmp")

    loaded = CompFile.from_file("route.ccmp")
    start, end = loaded.get_triggers()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path as FsPath
from uuid import UUID

import tenacity

from pathcomp.core.geometry import BoxCollider
from pathcomp.core.path import Path, PathCollection
from pathcomp.core.types import Vec3
from pathcomp.storage.codec import BinaryReader, BinaryWriter
from pathcomp.storage.errors import DecodeError, FileIOError
from pathcomp.storage.models import RetryPolicy

logger = logging.getLogger(__name__)

CURRENT_FILE_VERSION = "0.5"
LEGACY_FILE_VERSION = "0.4"
VERSION_TAG = "version"
FILE_EXTENSION = "ccmp"

type TriggerData = tuple[Vec3, Vec3, Vec3]
"""(position, rotation, size) of one trigger."""


@dataclass(slots=True)
class CompFile:
    """In-memory comparison file in the current schema."""

    trigger_data: tuple[TriggerData, TriggerData]
    collections: list[PathCollection] = field(default_factory=list)
    version: str = CURRENT_FILE_VERSION

    @classmethod
    def new(
        cls,
        triggers: tuple[BoxCollider, BoxCollider],
        collections: Sequence[PathCollection],
    ) -> CompFile:
        """Snapshot live triggers and collections for writing."""
        return cls(
            trigger_data=(triggers[0].snapshot(), triggers[1].snapshot()),
            collections=list(collections),
        )

    def get_triggers(self) -> tuple[BoxCollider, BoxCollider]:
        """Build fresh colliders from the stored poses."""
        start, end = self.trigger_data
        return (BoxCollider(*start), BoxCollider(*end))

    def get_collections(self) -> list[PathCollection]:
        return list(self.collections)

    # Encoding

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.string(VERSION_TAG)
        writer.string(CURRENT_FILE_VERSION)
        for trigger in self.trigger_data:
            _write_trigger(writer, trigger)
        writer.items(self.collections, lambda c: _write_collection(writer, c))
        return writer.getvalue()

    def to_file(self, file_path: str, retry: RetryPolicy | None = None) -> None:
        """Write the file, retrying transient OS errors.

        Raises:
            FileIOError: If every attempt failed.
        """
        data = self.to_bytes()
        policy = retry or RetryPolicy()
        try:
            for attempt in _build_retryer(policy):
                with attempt:
                    FsPath(file_path).write_bytes(data)
        except OSError as e:
            raise FileIOError(file_path, e) from e
        logger.info("Comparison saved to %s", file_path)

    # Decoding

    @classmethod
    def from_bytes(cls, data: bytes) -> CompFile:
        """Decode a comparison file of any supported version.

        Raises:
            DecodeError: If the bytes match no known schema.
        """
        version, reader = _read_envelope(data)
        if version is None:
            logger.info("No version header, reading as %s file", LEGACY_FILE_VERSION)
            return _decode_v04(BinaryReader(data))

        decoder = DECODERS.get(version)
        if decoder is None:
            raise DecodeError(f"Version {version} not compatible.")
        return decoder(reader)

    @classmethod
    def from_file(cls, file_path: str) -> CompFile:
        """Read and decode a comparison file.

        Raises:
            FileIOError: If the file cannot be read.
            DecodeError: If the contents match no known schema.
        """
        try:
            data = FsPath(file_path).read_bytes()
        except OSError as e:
            raise FileIOError(file_path, e) from e
        comp = cls.from_bytes(data)
        logger.info("Comparison loaded from %s", file_path)
        return comp


def _build_retryer(policy: RetryPolicy) -> tenacity.Retrying:
    """Build a tenacity retryer from RetryPolicy configuration."""
    stop = tenacity.stop_after_attempt(max(1, policy.max_attempts))

    wait: tenacity.wait.wait_base
    if policy.backoff == "exponential":
        wait = tenacity.wait_exponential(multiplier=policy.base_delay, min=policy.base_delay)
    elif policy.backoff == "linear":
        wait = tenacity.wait_incrementing(start=policy.base_delay, increment=policy.base_delay)
    else:
        wait = tenacity.wait_none()

    return tenacity.Retrying(
        stop=stop,
        wait=wait,
        retry=tenacity.retry_if_exception_type(OSError),
        reraise=True,
    )


def _read_envelope(data: bytes) -> tuple[str | None, BinaryReader]:
    """Read the ``"version"`` tag and value.

    Returns:
        (version, reader positioned after the header), or (None, reader) if
        the data does not start with the tag.
    """
    reader = BinaryReader(data)
    try:
        tag = reader.string()
    except DecodeError:
        return None, reader
    if tag != VERSION_TAG:
        return None, reader
    return reader.string(), reader


# Shared field codecs


def _write_trigger(writer: BinaryWriter, trigger: TriggerData) -> None:
    position, rotation, size = trigger
    writer.vec3(position)
    writer.vec3(rotation)
    writer.vec3(size)


def _read_trigger(reader: BinaryReader) -> TriggerData:
    return (reader.vec3(), reader.vec3(), reader.vec3())


def _write_path(writer: BinaryWriter, path: Path) -> None:
    writer.uuid(path.id)
    writer.items(path.times, writer.u64)
    writer.items(path.segments, lambda segment: writer.items(segment, writer.vec3))


def _write_collection(writer: BinaryWriter, collection: PathCollection) -> None:
    writer.uuid(collection.id)
    writer.string(collection.name)
    writer.items(collection.paths, lambda p: _write_path(writer, p))


# Schema 0.5


def _read_path_v05(reader: BinaryReader) -> Path:
    path_id = reader.uuid()
    times = reader.items(reader.u64)
    segments = reader.items(lambda: reader.items(reader.vec3))
    return Path(id=path_id, times=times, segments=segments)


def _read_collection_v05(reader: BinaryReader) -> PathCollection:
    collection_id = reader.uuid()
    name = reader.string()
    paths = reader.items(lambda: _read_path_v05(reader))
    return PathCollection(name=name, id=collection_id, paths=paths)


def _decode_v05(reader: BinaryReader) -> CompFile:
    trigger_data = (_read_trigger(reader), _read_trigger(reader))
    collections = reader.items(lambda: _read_collection_v05(reader))
    reader.expect_end()
    return CompFile(trigger_data=trigger_data, collections=collections)


# Schema 0.4 (single segment, single duration per path)


@dataclass(slots=True)
class OldPath:
    id: UUID
    time: int
    nodes: list[Vec3]

    def migrate(self) -> Path:
        return Path(id=self.id, times=[self.time], segments=[list(self.nodes)])


@dataclass(slots=True)
class OldPathCollection:
    id: UUID
    name: str
    paths: list[OldPath]

    def migrate(self) -> PathCollection:
        return PathCollection(
            name=self.name,
            id=self.id,
            paths=[old.migrate() for old in self.paths],
        )


def _read_old_path(reader: BinaryReader) -> OldPath:
    return OldPath(id=reader.uuid(), time=reader.u64(), nodes=reader.items(reader.vec3))


def _read_old_collection(reader: BinaryReader) -> OldPathCollection:
    return OldPathCollection(
        id=reader.uuid(),
        name=reader.string(),
        paths=reader.items(lambda: _read_old_path(reader)),
    )


def _decode_v04(reader: BinaryReader) -> CompFile:
    trigger_data = (_read_trigger(reader), _read_trigger(reader))
    old_collections = reader.items(lambda: _read_old_collection(reader))
    reader.expect_end()
    return CompFile(
        trigger_data=trigger_data,
        collections=[old.migrate() for old in old_collections],
    )


def encode_v04(
    trigger_data: tuple[TriggerData, TriggerData],
    collections: Sequence[OldPathCollection],
) -> bytes:
    """Encode data in the legacy 0.4 layout (fixtures and migration tooling)."""
    writer = BinaryWriter()
    for trigger in trigger_data:
        _write_trigger(writer, trigger)

    def write_old_path(path: OldPath) -> None:
        writer.uuid(path.id)
        writer.u64(path.time)
        writer.items(path.nodes, writer.vec3)

    def write_old_collection(collection: OldPathCollection) -> None:
        writer.uuid(collection.id)
        writer.string(collection.name)
        writer.items(collection.paths, write_old_path)

    writer.items(collections, write_old_collection)
    return writer.getvalue()


DECODERS: dict[str, Callable[[BinaryReader], CompFile]] = {
    CURRENT_FILE_VERSION: _decode_v05,
}
"""Envelope version -> decoder for everything after the header."""
