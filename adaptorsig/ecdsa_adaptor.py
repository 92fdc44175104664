"""ECDSA adaptor signatures: signatures encrypted under a public point.

The encrypted signature carries a discrete-log equality proof showing that
``R_hat = r*G`` and ``R = r*Y`` share the same ``r``.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field
from typing import Any

from .ecdsa_signature import Signature
from .ecmult import G, N, Point, mul_base, scalar_from_bytes, scalar_from_bytes_mod_order
from .schnorr import NonceKind

_NONCE_TAG = b"ECDSA/adaptor/nonce"
_DLEQ_TAG = b"DLEQ"
_PROOF_LEN = 64
_ENCRYPTED_LEN = 33 + 33 + 32 + _PROOF_LEN


def _tagged_hasher(tag: bytes) -> Any:
    tag_hash = hashlib.sha256(tag).digest()
    hasher = hashlib.sha256()
    hasher.update(tag_hash + tag_hash)
    return hasher


def _is_high(s: int) -> bool:
    return s > N // 2


def _nonzero_scalar(value: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer")
    if not 0 < value < N:
        raise ValueError(f"{what} must be a non-zero scalar")
    return value


def _message_bytes(message: bytes) -> bytes:
    message = bytes(message)
    if len(message) != 32:
        raise ValueError("message hash must be 32 bytes")
    return message


class _NonceStream:
    """A deterministic stream of non-zero scalars drawn from a seed."""

    def __init__(self, seed: bytes) -> None:
        self._seed = seed
        self._counter = 0

    def scalar(self) -> int:
        while True:
            block = hashlib.sha256(self._seed + self._counter.to_bytes(8, "big")).digest()
            self._counter += 1
            value = int.from_bytes(block, "big")
            if 0 < value < N:
                return value


@dataclass(frozen=True)
class PointNonce:
    """A non-zero point whose x-coordinate is non-zero modulo the curve order."""

    point: Point
    x_scalar: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.point, Point) or self.point.is_zero:
            raise ValueError("nonce point must be a non-zero point")
        x_scalar = self.point.x % N
        if x_scalar == 0:
            raise ValueError("nonce x-coordinate is zero modulo the curve order")
        object.__setattr__(self, "x_scalar", x_scalar)

    @classmethod
    def from_bytes(cls, data: bytes) -> PointNonce:
        """Decode a 33-byte compressed point."""
        return cls(Point.from_bytes(data))

    def to_bytes(self) -> bytes:
        """The 33-byte compressed encoding of the point."""
        return self.point.to_bytes()


def _dleq_challenge(R_hat: Point, Y: Point, R: Point, A1: Point, A2: Point) -> bytes:
    hasher = _tagged_hasher(_DLEQ_TAG)
    for point in (R_hat, Y, R, A1, A2):
        hasher.update(point.to_bytes())
    return hasher.digest()


def _dleq_prove(r: int, R_hat: Point, Y: Point, R: Point, stream: _NonceStream) -> bytes:
    k = stream.scalar()
    challenge = _dleq_challenge(R_hat, Y, R, mul_base(k), Y * k)
    c = scalar_from_bytes_mod_order(challenge)
    response = (k + c * r) % N
    return challenge + response.to_bytes(32, "big")


def _dleq_verify(R_hat: Point, Y: Point, R: Point, proof: bytes) -> bool:
    challenge = proof[:32]
    try:
        response = scalar_from_bytes(proof[32:])
    except ValueError:
        return False
    c = scalar_from_bytes_mod_order(challenge)
    A1 = mul_base(response) - R_hat * c
    A2 = Y * response - R * c
    if A1.is_zero or A2.is_zero:
        return False
    return _dleq_challenge(R_hat, Y, R, A1, A2) == challenge


@dataclass(frozen=True)
class EncryptedSignature:
    """An encrypted ECDSA signature, also called an adaptor or pre-signature."""

    R: PointNonce
    R_hat: Point
    s_hat: int
    proof: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.R, PointNonce):
            raise TypeError("R must be a PointNonce")
        if not isinstance(self.R_hat, Point) or self.R_hat.is_zero:
            raise ValueError("R_hat must be a non-zero point")
        _nonzero_scalar(self.s_hat, "s_hat")
        proof = bytes(self.proof)
        if len(proof) != _PROOF_LEN:
            raise ValueError("proof must be 64 bytes")
        scalar_from_bytes(proof[32:])
        object.__setattr__(self, "proof", proof)

    def to_bytes(self) -> bytes:
        """``R`` (33), ``R_hat`` (33), ``s_hat`` (32) and the proof (64): 162 bytes."""
        return (
            self.R.to_bytes()
            + self.R_hat.to_bytes()
            + self.s_hat.to_bytes(32, "big")
            + self.proof
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> EncryptedSignature:
        """Decode the 162-byte encoding."""
        data = bytes(data)
        if len(data) != _ENCRYPTED_LEN:
            raise ValueError("an ECDSA adaptor signature is 162 bytes")
        return cls(
            PointNonce.from_bytes(data[:33]),
            Point.from_bytes(data[33:66]),
            scalar_from_bytes(data[66:98]),
            data[98:],
        )

    @classmethod
    def from_hex(cls, text: str) -> EncryptedSignature:
        """Decode an encrypted signature from hex."""
        try:
            data = bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError("invalid hex for an ECDSA adaptor signature") from exc
        return cls.from_bytes(data)

    def __str__(self) -> str:
        return self.to_bytes().hex()


class Adaptor:
    """ECDSA signature encryption; without a nonce kind it can only verify."""

    def __init__(self, nonce_gen: NonceKind | None = NonceKind.SYNTHETIC) -> None:
        if nonce_gen is not None and not isinstance(nonce_gen, NonceKind):
            raise TypeError("nonce_gen must be a NonceKind or None")
        self.nonce_gen = nonce_gen
        self.enforce_low_s = True

    @classmethod
    def verify_only(cls) -> Adaptor:
        """An instance that can verify, decrypt and recover but not sign."""
        return cls(None)

    def _nonce_stream(self, secret: int, Y: Point, message: bytes) -> _NonceStream:
        if self.nonce_gen is None:
            raise ValueError("this instance can only verify; it has no nonce generator")
        hasher = _tagged_hasher(_NONCE_TAG)
        if self.nonce_gen is NonceKind.SYNTHETIC:
            hasher.update(secrets.token_bytes(32))
        hasher.update(secret.to_bytes(32, "big"))
        hasher.update(Y.to_bytes())
        hasher.update(message)
        return _NonceStream(hasher.digest())

    def encrypted_sign(
        self, signing_key: int, encryption_key: Point, message: bytes
    ) -> EncryptedSignature:
        """Sign the 32-byte ``message`` with the signature encrypted under ``encryption_key``."""
        x = _nonzero_scalar(signing_key, "signing key")
        Y = encryption_key
        if Y.is_zero:
            raise ValueError("encryption key must not be the point at infinity")
        message = _message_bytes(message)
        m = scalar_from_bytes_mod_order(message)
        stream = self._nonce_stream(x, Y, message)

        r = stream.scalar()
        R_hat = mul_base(r)
        R = Y * r
        proof = _dleq_prove(r, R_hat, Y, R, stream)

        try:
            nonce = PointNonce(R)
        except ValueError as exc:
            raise RuntimeError("computationally unreachable: degenerate nonce") from exc
        s_hat = pow(r, -1, N) * (m + nonce.x_scalar * x) % N
        if s_hat == 0:
            raise RuntimeError("computationally unreachable: zero s_hat")
        return EncryptedSignature(nonce, R_hat, s_hat, proof)

    def encryption_key_for(self, decryption_key: int) -> Point:
        """The public encryption key for a secret decryption key."""
        return mul_base(_nonzero_scalar(decryption_key, "decryption key"))

    def verify_encrypted_signature(
        self,
        verification_key: Point,
        encryption_key: Point,
        message_hash: bytes,
        ciphertext: EncryptedSignature,
    ) -> bool:
        """Whether decrypting ``ciphertext`` yields a signature on ``message_hash``."""
        X = verification_key
        Y = encryption_key
        m = scalar_from_bytes_mod_order(_message_bytes(message_hash))
        if Y.is_zero:
            return False
        if not _dleq_verify(ciphertext.R_hat, Y, ciphertext.R.point, ciphertext.proof):
            return False
        s_hat_inv = pow(ciphertext.s_hat, -1, N)
        implied = mul_base(s_hat_inv * m) + X * (s_hat_inv * ciphertext.R.x_scalar)
        return implied == ciphertext.R_hat

    def decrypt_signature(self, decryption_key: int, ciphertext: EncryptedSignature) -> Signature:
        """Decrypt ``ciphertext`` into a low-s ECDSA signature."""
        y = _nonzero_scalar(decryption_key, "decryption key")
        s = ciphertext.s_hat * pow(y, -1, N) % N
        if _is_high(s):
            s = N - s
        return Signature(ciphertext.R.x_scalar, s)

    def recover_decryption_key(
        self,
        encryption_key: Point,
        signature: Signature,
        ciphertext: EncryptedSignature,
    ) -> int | None:
        """The decryption key revealed by ``signature``, or None if it is unrelated."""
        if ciphertext.R.x_scalar != signature.R_x:
            return None
        if _is_high(signature.s) and self.enforce_low_s:
            return None
        y = pow(signature.s, -1, N) * ciphertext.s_hat % N
        Y = mul_base(y)
        if Y == encryption_key:
            return y
        if -Y == encryption_key:
            return N - y
        return None


__all__ = ["Adaptor", "EncryptedSignature", "PointNonce", "G"]