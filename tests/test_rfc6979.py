"""
Tests for deterministic nonce derivation.

Vectors for secp256k1 are the ones published with python-ecdsa
(RFC 6979 has none for this curve); the 163-bit case is RFC 6979 §A.1 and
needs both bit truncation and the retry loop.
"""

import hashlib

import pytest

from secpsig import (
    ORDER,
    InvalidInput,
    InvalidScalarRange,
    NonceDerivationFailed,
    NonceGenerator,
    generate_k,
)
from secpsig import rfc6979


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


class TestVectors:
    """Known-answer tests"""

    @pytest.mark.parametrize(
        "secret, message, expected",
        [
            (
                0x9D0219792467D7D37B4D43298A7D0C05,
                b"sample",
                0x8FA1F95D514760E498F28957B824EE6EC39ED64826FF4FECC2B5739EC45B91CD,
            ),
            (
                0xCCA9FBCC1B41E5A95D369EAA6DDCFF73B61A4EFAA279CFC6567E8DAA39CBAF50,
                b"sample",
                0x2DF40CA70E639D89528A6B670D9D48D9165FDC0FEBC0974056BDCE192B8E16A3,
            ),
            (
                0x1,
                b"Satoshi Nakamoto",
                0x8F8A276C19F4149656B280621E358CCE24F5F52542772691EE69063B74F15D15,
            ),
            (
                0x1,
                b"All those moments will be lost in time, like tears in rain. "
                b"Time to die...",
                0x38AA22D72376B4DBC472E06C3BA403EE0A394DA63FC58D88686C611ABA98D6B3,
            ),
            (
                ORDER - 1,
                b"Satoshi Nakamoto",
                0x33A19B60E25FB6F4435AF53A3D42D493644827367E6453928554F43E49AA6F90,
            ),
            (
                0xF8B8AF8CE3C7CCA5E300D33939540C10D45CE001B8F252BFBC57BA0342904181,
                b"Alan Turing",
                0x525A82B70E67874398067543FD84C83D30C175FDC45FDEEE082FE13B1D7CFDF1,
            ),
        ],
    )
    def test_secp256k1(self, secret: int, message: bytes, expected: int) -> None:
        assert generate_k(secret, sha256(message)) == expected

    def test_rfc_163_bit_order(self) -> None:
        order = 0x4000000000000000000020108A2E0CC0D99F8A5EF
        secret = 0x09A4D6792295A7F730FC3F2B49CBC0F62E862272F
        digest = bytes.fromhex(
            "AF2BDBE1AA9B6EC1E2ADE1D694F41FC71A831D0268E9891562113D8A62ADD1BF"
        )
        k = generate_k(secret, digest, order=order)
        assert k == 0x23AF4074C90A02B3FE61D286D5C87F425E6BDD81B


class TestDeterminism:
    """Same inputs, same nonce; any change, different nonce"""

    def test_repeatable(self, digest: bytes) -> None:
        assert generate_k(12345, digest) == generate_k(12345, digest)

    def test_bit_flip_in_digest(self, digest: bytes) -> None:
        flipped = bytes([digest[0] ^ 0x01]) + digest[1:]
        assert generate_k(12345, digest) != generate_k(12345, flipped)

    def test_bit_flip_in_key(self, digest: bytes) -> None:
        assert generate_k(12345, digest) != generate_k(12345 ^ 0x10, digest)

    def test_extra_entropy(self, digest: bytes) -> None:
        base = generate_k(12345, digest)
        k1 = generate_k(12345, digest, extra_entropy=b"context")
        k2 = generate_k(12345, digest, extra_entropy=b"context")
        assert k1 == k2
        assert k1 != base

    def test_iteration_continues_the_drbg(self, digest: bytes) -> None:
        gen = NonceGenerator(12345, digest)
        first, second, third = [k for k, _ in zip(gen, range(3))]
        assert first == generate_k(12345, digest)
        assert len({first, second, third}) == 3
        for k in (first, second, third):
            assert 0 < k < ORDER


class TestRejection:
    """Retry loop and its bound"""

    def test_tiny_order_forces_retries(self) -> None:
        # with q = 2 only the candidate 1 is valid; most draws are rejected
        for i in range(8):
            assert generate_k(1, sha256(bytes([i])), order=2) == 1

    def test_bound_exceeded(self, monkeypatch, digest: bytes) -> None:
        monkeypatch.setattr(rfc6979, "bits2int", lambda data, qlen: 0)
        with pytest.raises(NonceDerivationFailed):
            generate_k(12345, digest)


class TestInputValidation:
    """Bad inputs fail before the DRBG runs"""

    @pytest.mark.parametrize("secret", [0, ORDER, -5])
    def test_secret_out_of_range(self, secret: int, digest: bytes) -> None:
        with pytest.raises(InvalidScalarRange):
            generate_k(secret, digest)

    @pytest.mark.parametrize("size", [0, 20, 31, 33, 64])
    def test_digest_length(self, size: int) -> None:
        with pytest.raises(InvalidInput):
            generate_k(12345, b"\x01" * size)

    def test_digest_length_follows_hash(self) -> None:
        digest = hashlib.sha512(b"x").digest()
        k = generate_k(12345, digest, hash_func=hashlib.sha512)
        assert 0 < k < ORDER
        with pytest.raises(InvalidInput):
            generate_k(12345, digest)
