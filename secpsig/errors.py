"""
Exception hierarchy for secpsig.

Every failure on bad input is reported by raising exactly one of these.
Each class also derives from the builtin that plain Python code would have
raised in the same spot, so ``except ValueError`` keeps working for callers
that do not care about the specific kind.
"""

from __future__ import annotations


class ECDSAError(Exception):
    """Base class for all secpsig errors."""


# ── arithmetic ──────────────────────────────────────────────────────────
class ModulusMismatch(ECDSAError, ValueError):
    """Operands from different moduli were combined."""


class CurveMismatch(ModulusMismatch):
    """Points from different curves were combined."""


class NotInvertible(ECDSAError, ZeroDivisionError):
    """Inverse requested for the additive identity."""


class PointNotOnCurve(ECDSAError, ValueError):
    """Coordinates do not satisfy  y² = x³ + a·x + b."""


# ── input validation ────────────────────────────────────────────────────
class InvalidInput(ECDSAError, ValueError):
    """Malformed argument: wrong length, wrong type, out of domain."""


class InvalidScalarRange(InvalidInput):
    """A private key, nonce, r or s lies outside its required range."""


class InvalidPrivateKey(InvalidScalarRange):
    """Private key is not a 32-byte integer in [1, n-1]."""


class InvalidSignature(InvalidScalarRange):
    """Signature component r or s outside [1, n-1]."""


class NonCanonicalSignature(InvalidSignature):
    """s > n/2 while verifying under the low-s policy."""


class InvalidPointEncoding(InvalidInput):
    """Malformed SEC 1 point encoding."""


class InvalidSignatureEncoding(InvalidInput):
    """Malformed raw or DER signature encoding."""


class InvalidPublicKey(ECDSAError, ValueError):
    """Public key is the identity, off-curve or undecodable."""


# ── protocol outcomes ───────────────────────────────────────────────────
class SignatureVerificationFailed(ECDSAError):
    """Well-formed inputs whose final check  x(u1·G + u2·Q) ≡ r  fails."""


class NonceDerivationFailed(ECDSAError, RuntimeError):
    """RFC 6979 retry cascade exceeded its bound; indicates a defect."""
