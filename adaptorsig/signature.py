"""BIP-340 style Schnorr signatures and their 64-byte encoding."""

from __future__ import annotations

import secrets
from dataclasses import dataclass

from .ecmult import N, Point, scalar_from_bytes


@dataclass(frozen=True)
class Signature:
    """A Schnorr signature: the nonce's x-coordinate ``R`` and the response ``s``."""

    R: bytes
    s: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "R", bytes(self.R))
        Point.lift_x(self.R)
        if not 0 <= self.s < N:
            raise ValueError("s is not a scalar")

    def to_bytes(self) -> bytes:
        """The 32-byte nonce x-coordinate followed by the 32-byte response."""
        return self.R + self.s.to_bytes(32, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Decode 64 bytes, rejecting an invalid x-coordinate or scalar."""
        data = bytes(data)
        if len(data) != 64:
            raise ValueError("a signature is 64 bytes")
        return cls(data[:32], scalar_from_bytes(data[32:]))

    @classmethod
    def from_hex(cls, text: str) -> Signature:
        """Decode a signature from 128 hex digits."""
        try:
            data = bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError("invalid hex for a secp256k1 Schnorr signature") from exc
        return cls.from_bytes(data)

    @classmethod
    def random(cls) -> Signature:
        """A uniformly random signature, useful for testing."""
        while True:
            candidate = secrets.token_bytes(32)
            try:
                Point.lift_x(candidate)
            except ValueError:
                continue
            return cls(candidate, secrets.randbelow(N))

    def as_tuple(self) -> tuple[bytes, int]:
        """The pair ``(R, s)``."""
        return self.R, self.s

    def __str__(self) -> str:
        return self.to_bytes().hex()