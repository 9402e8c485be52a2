"""Snapshot codec and byte storage helpers.

Snapshots (see ``tile_merge.env.snapshot``) are packed with Flax's msgpack
codec and written either to a local path or to a ``gs://`` URL.
"""

from __future__ import annotations

import os
from typing import Any, Dict

from google.cloud import storage

from flax.serialization import msgpack_restore, msgpack_serialize

from tile_merge.env.snapshot import SnapshotError, validate_snapshot


def encode_snapshot(snapshot: Dict[str, Any]) -> bytes:
    """Pack a game snapshot into msgpack bytes."""
    return msgpack_serialize(snapshot)


def decode_snapshot(data: bytes) -> Dict[str, Any]:
    """Unpack and validate msgpack bytes written by ``encode_snapshot``."""
    try:
        snapshot = msgpack_restore(data)
    except Exception as exc:
        raise SnapshotError(f"Unreadable snapshot: {exc}") from exc
    validate_snapshot(snapshot)
    return snapshot


def _split_gcs(path: str) -> tuple[str, str]:
    bucket, blob_name = path[5:].split("/", 1)
    return bucket, blob_name


def save_bytes(data: bytes, path: str) -> None:
    """Write raw bytes to ``path`` which may be local or ``gs://``."""
    if path.startswith("gs://"):
        bucket, blob_name = _split_gcs(path)
        client = storage.Client()
        client.bucket(bucket).blob(blob_name).upload_from_string(data)
    else:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)


def load_bytes(path: str) -> bytes:
    """Load raw bytes from ``path`` which may be local or ``gs://``."""
    if path.startswith("gs://"):
        bucket, blob_name = _split_gcs(path)
        client = storage.Client()
        blob = client.bucket(bucket).blob(blob_name)
        if not blob.exists():
            raise FileNotFoundError(path)
        return blob.download_as_bytes()
    with open(path, "rb") as f:
        return f.read()


def path_exists(path: str) -> bool:
    if path.startswith("gs://"):
        bucket, blob_name = _split_gcs(path)
        client = storage.Client()
        return client.bucket(bucket).blob(blob_name).exists()
    return os.path.exists(path)


def delete_path(path: str) -> None:
    """Remove ``path`` if it exists."""
    if path.startswith("gs://"):
        bucket, blob_name = _split_gcs(path)
        client = storage.Client()
        blob = client.bucket(bucket).blob(blob_name)
        if blob.exists():
            blob.delete()
    elif os.path.exists(path):
        os.remove(path)
