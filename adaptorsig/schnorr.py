"""BIP-340 style Schnorr signing and verification over secp256k1."""

from __future__ import annotations

import enum
import hashlib
import secrets
from dataclasses import dataclass
from typing import Any

from .ecmult import G, N, Point, mul_base, scalar_from_bytes_mod_order
from .message import Message
from .signature import Signature

_NONCE_TAG = b"BIP0340/nonce"
_CHALLENGE_TAG = b"BIP0340/challenge"


def _tagged_hasher(tag: bytes) -> Any:
    """A SHA-256 hasher primed with the tag's hash written twice."""
    tag_hash = hashlib.sha256(tag).digest()
    hasher = hashlib.sha256()
    hasher.update(tag_hash + tag_hash)
    return hasher


def _feed(hasher: Any, item: Any) -> None:
    """Hash a public input: bytes as-is, points compressed, messages as messages."""
    if isinstance(item, Message):
        item.hash_into(hasher)
    elif isinstance(item, Point):
        hasher.update(item.to_bytes())
    elif isinstance(item, int) and not isinstance(item, bool):
        hasher.update((item % N).to_bytes(32, "big"))
    else:
        hasher.update(bytes(item))


def _even_y_scalar(k: int) -> tuple[int, bytes]:
    """Return ``k``, negated if ``k*G`` has odd y, and the x-only bytes of ``k*G``."""
    point = mul_base(k)
    if point.is_zero:
        raise ValueError("scalar must not be zero")
    if not point.has_even_y():
        k = N - k
    return k, point.xonly_bytes()


class NonceKind(enum.Enum):
    """How secret nonces are derived when signing."""

    DETERMINISTIC = "deterministic"
    """Hash of the secret key and the public inputs only."""
    SYNTHETIC = "synthetic"
    """Like deterministic, with 32 fresh random bytes mixed in."""


@dataclass(frozen=True)
class KeyPair:
    """A secret key ``sk`` whose public key ``pk`` (x-only bytes) has even y."""

    sk: int
    pk: bytes

    def verification_key(self) -> Point:
        """The full public point with even y."""
        return Point.lift_x(self.pk)

    def as_tuple(self) -> tuple[int, bytes]:
        """The pair ``(sk, pk)``."""
        return self.sk, self.pk


class Schnorr:
    """A BIP-340 Schnorr scheme; without a nonce kind it can only verify."""

    def __init__(self, nonce_gen: NonceKind | None = NonceKind.SYNTHETIC) -> None:
        if nonce_gen is not None and not isinstance(nonce_gen, NonceKind):
            raise TypeError("nonce_gen must be a NonceKind or None")
        self.nonce_gen = nonce_gen
        self._challenge_hash = _tagged_hasher(_CHALLENGE_TAG)

    @classmethod
    def verify_only(cls) -> Schnorr:
        """An instance that can verify but not sign."""
        return cls(None)

    @property
    def G(self) -> Point:
        """The generator the scheme is defined with."""
        return G

    def derive_nonce(self, secret: int, *public_inputs: Any) -> int:
        """Derive a non-zero secret nonce from a secret scalar and public inputs."""
        if self.nonce_gen is None:
            raise ValueError("this instance can only verify; it has no nonce generator")
        hasher = _tagged_hasher(_NONCE_TAG)
        if self.nonce_gen is NonceKind.SYNTHETIC:
            hasher.update(secrets.token_bytes(32))
        hasher.update((secret % N).to_bytes(32, "big"))
        for item in public_inputs:
            _feed(hasher, item)
        nonce = scalar_from_bytes_mod_order(hasher.digest())
        if nonce == 0:
            raise RuntimeError("computationally unreachable: zero nonce")
        return nonce

    def new_keypair(self, sk: int) -> KeyPair:
        """Make a key pair from ``sk``; the secret is negated if its point has odd y."""
        if isinstance(sk, bool) or not isinstance(sk, int):
            raise TypeError("secret key must be an integer")
        if not 0 < sk < N:
            raise ValueError("secret key must be a non-zero scalar")
        sk, pk = _even_y_scalar(sk)
        return KeyPair(sk, pk)

    def sign(self, keypair: KeyPair, message: Message) -> Signature:
        """Sign ``message`` with ``keypair``."""
        x, X = keypair.as_tuple()
        r = self.derive_nonce(x, X, message)
        r, R = _even_y_scalar(r)
        c = self.challenge(R, X, message)
        return Signature(R, (r + c * x) % N)

    def challenge(self, R: bytes, X: bytes, message: Message) -> int:
        """The Fiat-Shamir challenge ``H(R || X || m)`` as a scalar, possibly zero."""
        hasher = self._challenge_hash.copy()
        hasher.update(bytes(R))
        hasher.update(bytes(X))
        message.hash_into(hasher)
        return scalar_from_bytes_mod_order(hasher.digest())

    def verify(self, public_key: Point, message: Message, signature: Signature) -> bool:
        """Whether ``signature`` is valid on ``message`` under ``public_key``."""
        if public_key.is_zero or not public_key.has_even_y():
            raise ValueError("public key must be a point with even y")
        R, s = signature.as_tuple()
        c = self.challenge(R, public_key.xonly_bytes(), message)
        implied = mul_base(s) - public_key * c
        return (
            not implied.is_zero
            and implied.has_even_y()
            and implied.xonly_bytes() == R
        )

    def anticipate_signature(self, X: Point, R: Point, message: Message) -> Point:
        """The point ``R + c*X`` that the signature's ``s`` will be the discrete log of."""
        for point in (X, R):
            if point.is_zero or not point.has_even_y():
                raise ValueError("points must have even y")
        c = self.challenge(R.xonly_bytes(), X.xonly_bytes(), message)
        return R + X * c