"""Schnorr (BIP-340 style) signatures and Schnorr and ECDSA adaptor signatures over secp256k1."""

__version__ = "0.1.0"

__all__ = [
    "adaptor",
    "ecdsa_adaptor",
    "ecdsa_signature",
    "ecmult",
    "message",
    "quick_bip340",
    "schnorr",
    "signature",
]