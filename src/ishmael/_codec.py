"""Versioned, checksummed msgpack serialization of a Dfm."""

from __future__ import annotations

import dataclasses
import hashlib
from typing import Any

import msgpack

from ._dfm import Dfm
from ._errors import (
    InputError,
    IshmaelChecksumError,
    IshmaelError,
    IshmaelVersionError,
)
from ._types import TokenPolicy

FORMAT_VERSION = "1.0"


def _sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _unpack(data: bytes, what: str) -> Any:
    try:
        return msgpack.unpackb(data, raw=False)
    except (ValueError, msgpack.exceptions.UnpackException) as e:
        raise IshmaelError(f"cannot decode {what}: {e}") from e


def dumps_dfm(dfm: Dfm) -> bytes:
    """Serialize a Dfm to bytes.

    Rows are stored sparsely as ``[feature_index, value]`` pairs. The body is
    wrapped in an envelope carrying the format version and its SHA-256.
    """
    if not isinstance(dfm, Dfm):
        raise InputError(f"expected Dfm, got {type(dfm).__name__}")
    index = {f: i for i, f in enumerate(dfm.features)}
    body = {
        "doc_ids": dfm.doc_ids,
        "features": dfm.features,
        "rows": [
            [[index[f], v] for f, v in dfm.nonzero(i).items()]
            for i in range(dfm.ndoc)
        ],
        "policy": (
            dataclasses.asdict(dfm.policy) if dfm.policy is not None else None
        ),
        "weighting": dfm.weighting,
    }
    packed = msgpack.packb(body, use_bin_type=True)
    return msgpack.packb(
        {"version": FORMAT_VERSION, "sha256": _sha256(packed), "body": packed},
        use_bin_type=True,
    )


def _validate_body(body: Any) -> None:
    if not isinstance(body, dict):
        raise IshmaelError("dfm body is not a map")
    for key in ("doc_ids", "features", "rows", "policy", "weighting"):
        if key not in body:
            raise IshmaelError(f"dfm body has no {key!r}")
    for key in ("doc_ids", "features", "rows"):
        if not isinstance(body[key], list):
            raise IshmaelError(f"dfm body {key!r} is not a list")
    if not all(isinstance(s, str) for s in body["doc_ids"] + body["features"]):
        raise IshmaelError("dfm doc ids and features must be strings")
    if not isinstance(body["weighting"], str):
        raise IshmaelError("dfm weighting must be a string")
    if body["policy"] is not None and not isinstance(body["policy"], dict):
        raise IshmaelError("dfm policy must be a map")
    n_features = len(body["features"])
    for row in body["rows"]:
        if not isinstance(row, list):
            raise IshmaelError("dfm row is not a list")
        for cell in row:
            if (
                not isinstance(cell, list) or len(cell) != 2
                or isinstance(cell[0], bool) or not isinstance(cell[0], int)
                or not 0 <= cell[0] < n_features
                or isinstance(cell[1], bool)
                or not isinstance(cell[1], (int, float))
            ):
                raise IshmaelError(f"invalid dfm cell {cell!r}")


def loads_dfm(data: bytes) -> Dfm:
    """Rebuild a Dfm from ``dumps_dfm`` output.

    Raises:
        IshmaelVersionError: Payload written by an unsupported format version.
        IshmaelChecksumError: Body does not match its recorded checksum.
        IshmaelError: Bytes are not a Dfm payload at all.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InputError(f"expected bytes, got {type(data).__name__}")
    envelope = _unpack(bytes(data), "payload")
    if not isinstance(envelope, dict) or "body" not in envelope:
        raise IshmaelError("payload is not a serialized dfm")

    version = envelope.get("version")
    if version != FORMAT_VERSION:
        raise IshmaelVersionError(
            f"Expected format version {FORMAT_VERSION!r}, got {version!r}"
        )
    packed = envelope["body"]
    if not isinstance(packed, bytes):
        raise IshmaelError("dfm body must be binary")
    expected = envelope.get("sha256")
    actual = _sha256(packed)
    if actual != expected:
        raise IshmaelChecksumError(
            f"Checksum mismatch: expected {str(expected)[:16]}..., "
            f"got {actual[:16]}..."
        )

    body = _unpack(packed, "dfm body")
    _validate_body(body)
    features: list[str] = body["features"]
    rows = [
        {features[i]: v for i, v in row}
        for row in body["rows"]
    ]
    try:
        policy = (
            TokenPolicy(**body["policy"]) if body["policy"] is not None else None
        )
        return Dfm(body["doc_ids"], features, rows, policy, body["weighting"])
    except (TypeError, InputError) as e:
        raise IshmaelError(f"invalid dfm body: {e}") from e
