"""Tests for msgpack serialization of a Dfm."""

import hashlib

import msgpack
import pytest

from ishmael import (
    FORMAT_VERSION,
    InputError,
    IshmaelChecksumError,
    IshmaelError,
    IshmaelVersionError,
    build_dfm,
    dumps_dfm,
    loads_dfm,
    weight,
)


@pytest.fixture
def dfm(chapters):
    return build_dfm(chapters, remove_punct=True)


def test_round_trip(dfm):
    """Doc ids, features, cells and policy survive serialization."""
    restored = loads_dfm(dumps_dfm(dfm))
    assert restored.doc_ids == dfm.doc_ids
    assert restored.features == dfm.features
    assert restored.to_dense() == dfm.to_dense()
    assert restored.policy == dfm.policy
    assert restored.weighting == "count"


def test_weighted_round_trip(dfm):
    """Float cells and the weighting label survive serialization."""
    w = weight(dfm, "relFreq", multiplier=100)
    restored = loads_dfm(dumps_dfm(w))
    assert restored.weighting == "relFreq"
    assert restored["whale"].to_list() == w["whale"].to_list()


def _envelope(data):
    return msgpack.unpackb(data, raw=False)


def test_version_mismatch(dfm):
    """An unknown format version is refused."""
    env = _envelope(dumps_dfm(dfm))
    env["version"] = "0.9"
    with pytest.raises(IshmaelVersionError):
        loads_dfm(msgpack.packb(env, use_bin_type=True))


def test_checksum_mismatch(dfm):
    """A body edited after packing fails the checksum."""
    env = _envelope(dumps_dfm(dfm))
    body = msgpack.unpackb(env["body"], raw=False)
    body["rows"][1] = []
    env["body"] = msgpack.packb(body, use_bin_type=True)
    with pytest.raises(IshmaelChecksumError):
        loads_dfm(msgpack.packb(env, use_bin_type=True))


def test_format_version_recorded(dfm):
    assert _envelope(dumps_dfm(dfm))["version"] == FORMAT_VERSION


@pytest.mark.parametrize("data", [
    b"",
    b"\xc1",
    msgpack.packb([1, 2, 3]),
])
def test_not_a_payload(data):
    """Bytes that are not a dfm envelope raise IshmaelError."""
    with pytest.raises(IshmaelError):
        loads_dfm(data)


def _checksummed(body, body_bytes=None):
    packed = body_bytes if body_bytes is not None else msgpack.packb(body, use_bin_type=True)
    return msgpack.packb({
        "version": FORMAT_VERSION,
        "sha256": hashlib.sha256(packed).hexdigest(),
        "body": packed,
    }, use_bin_type=True)


def test_body_not_binary():
    """A text body is rejected before hashing."""
    data = msgpack.packb(
        {"version": FORMAT_VERSION, "sha256": "x", "body": "notbytes"},
        use_bin_type=True,
    )
    with pytest.raises(IshmaelError):
        loads_dfm(data)


@pytest.mark.parametrize("body", [
    {"doc_ids": []},
    [1, 2],
    {"doc_ids": ["a"], "features": ["x"], "rows": [[[5, 1]]],
     "policy": None, "weighting": "count"},
    {"doc_ids": ["a"], "features": ["x"], "rows": [[["x", 1]]],
     "policy": None, "weighting": "count"},
    {"doc_ids": ["a", "b"], "features": ["x"], "rows": [[[0, 1]]],
     "policy": None, "weighting": "count"},
    {"doc_ids": ["a"], "features": ["x"], "rows": [[[0, 1]]],
     "policy": {"colour": True}, "weighting": "count"},
])
def test_malformed_body(body):
    """A correctly checksummed but malformed body raises IshmaelError."""
    with pytest.raises(IshmaelError):
        loads_dfm(_checksummed(body))


def test_body_not_msgpack():
    """Checksummed garbage in the body raises IshmaelError."""
    with pytest.raises(IshmaelError):
        loads_dfm(_checksummed(None, body_bytes=b"\xc1"))


def test_requires_bytes():
    """Wrong argument types are input errors."""
    with pytest.raises(InputError):
        loads_dfm("not bytes")
    with pytest.raises(InputError):
        dumps_dfm({"whale": 1})
