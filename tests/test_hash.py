"""Tests for digest conversions."""

import hashlib

import pytest

from secpsig import ORDER, InvalidInput, hash_message
from secpsig.hash import bits2int, bits2octets, check_digest, digest_to_int


def test_hash_message_is_sha256() -> None:
    assert hash_message(b"abc") == hashlib.sha256(b"abc").digest()
    assert len(hash_message(b"abc", hashlib.sha512)) == 64


def test_bits2int_truncates_to_qlen() -> None:
    assert bits2int(b"\xff\x00", 8) == 0xFF
    assert bits2int(b"\xff\x00", 16) == 0xFF00
    assert bits2int(b"\x80", 32) == 0x80


def test_bits2octets_reduces() -> None:
    assert bits2octets(ORDER.to_bytes(32, "big"), ORDER) == b"\x00" * 32
    assert bits2octets((ORDER + 5).to_bytes(32, "big"), ORDER)[-1] == 5


def test_digest_to_int() -> None:
    assert digest_to_int(b"\xff" * 32) == (2**256 - 1) % ORDER
    assert digest_to_int(b"\x00" * 32) == 0


@pytest.mark.parametrize("value", [b"", b"\x00" * 31, "a" * 32, None])
def test_check_digest_rejects(value) -> None:
    with pytest.raises(InvalidInput):
        check_digest(value)
