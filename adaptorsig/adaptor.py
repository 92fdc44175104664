"""One-time encrypted Schnorr signatures, also known as adaptor signatures.

Anyone who holds the encrypted signature can learn the decryption key from
the decrypted signature, which is what makes the scheme useful.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ecmult import N, Point
from .message import Message
from .schnorr import KeyPair, Schnorr
from .signature import Signature


@dataclass(frozen=True)
class EncryptedSignature:
    """An encrypted signature: the nonce ``R`` (even y) and the encrypted ``s_hat``.

    ``needs_negation`` tells the decryptor to negate their decryption key
    before decrypting, a side effect of x-only public keys.
    """

    R: Point
    s_hat: int
    needs_negation: bool

    def __post_init__(self) -> None:
        if self.R.is_zero or not self.R.has_even_y():
            raise ValueError("R must be a point with even y")
        if isinstance(self.s_hat, bool) or not isinstance(self.s_hat, int):
            raise TypeError("s_hat must be an integer")
        if not 0 <= self.s_hat < N:
            raise ValueError("s_hat is not a scalar")
        object.__setattr__(self, "needs_negation", bool(self.needs_negation))


def _nonzero_scalar(value: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer")
    if not 0 < value < N:
        raise ValueError(f"{what} must be a non-zero scalar")
    return value


def encrypted_sign(
    schnorr: Schnorr,
    keypair: KeyPair,
    encryption_key: Point,
    message: Message,
) -> EncryptedSignature:
    """Sign ``message`` with the signature encrypted under ``encryption_key``."""
    if encryption_key.is_zero:
        raise ValueError("encryption key must not be the point at infinity")
    x, X = keypair.as_tuple()
    Y = encryption_key
    # Y goes into the nonce derivation so that r*G + Y is pseudorandom for every Y.
    r = schnorr.derive_nonce(x, X, Y, message)
    R = schnorr.G * r + Y
    if R.is_zero:
        raise RuntimeError("computationally unreachable: zero nonce point")
    needs_negation = not R.has_even_y()
    if needs_negation:
        R = -R
        r = N - r
    c = schnorr.challenge(R.xonly_bytes(), X, message)
    s_hat = (r + c * x) % N
    return EncryptedSignature(R, s_hat, needs_negation)


def encryption_key_for(schnorr: Schnorr, decryption_key: int) -> Point:
    """The public encryption key for a secret decryption key."""
    return schnorr.G * _nonzero_scalar(decryption_key, "decryption key")


def verify_encrypted_signature(
    schnorr: Schnorr,
    verification_key: Point,
    encryption_key: Point,
    message: Message,
    encrypted_signature: EncryptedSignature,
) -> bool:
    """Whether decrypting ``encrypted_signature`` yields a valid signature on ``message``."""
    if verification_key.is_zero or not verification_key.has_even_y():
        raise ValueError("verification key must be a point with even y")
    R = encrypted_signature.R
    Y = encryption_key
    R_hat = R + Y if encrypted_signature.needs_negation else R - Y
    c = schnorr.challenge(R.xonly_bytes(), verification_key.xonly_bytes(), message)
    return R_hat == schnorr.G * encrypted_signature.s_hat - verification_key * c


def decrypt_signature(
    schnorr: Schnorr,
    decryption_key: int,
    encrypted_signature: EncryptedSignature,
) -> Signature:
    """Decrypt ``encrypted_signature`` into an ordinary signature."""
    if isinstance(decryption_key, bool) or not isinstance(decryption_key, int):
        raise TypeError("decryption key must be an integer")
    y = decryption_key % N
    if encrypted_signature.needs_negation:
        y = (N - y) % N
    s = (encrypted_signature.s_hat + y) % N
    return Signature(encrypted_signature.R.xonly_bytes(), s)


def recover_decryption_key(
    schnorr: Schnorr,
    encryption_key: Point,
    encrypted_signature: EncryptedSignature,
    signature: Signature,
) -> int | None:
    """The decryption key revealed by ``signature``, or None if it is unrelated."""
    if signature.R != encrypted_signature.R.xonly_bytes():
        return None
    y = (signature.s - encrypted_signature.s_hat) % N
    if encrypted_signature.needs_negation:
        y = (N - y) % N
    if y == 0 or encryption_key.is_zero:
        return None
    if schnorr.G * y == encryption_key:
        return y
    return None