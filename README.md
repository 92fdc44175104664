# adaptorsig

Schnorr signatures in the style of BIP-340, and one-time "adaptor"
signature encryption for both Schnorr and ECDSA, on the secp256k1 curve.
Pure Python, standard library only.

It is meant for learning, prototyping and testing protocols. Nothing in it
runs in constant time, so do not protect real funds with it.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `adaptorsig.ecmult` | The curve constants `P`, `N`, the generator `G` and `INFINITY`. The immutable `Point` type supports `+`, `-`, negation, multiplication by an integer, `is_zero`, `has_even_y`, the 33-byte compressed encoding (`to_bytes` / `from_bytes`), the 32-byte x-only encoding (`xonly_bytes`) and `lift_x`. Also `mul_base`, the table builders `ecmult_gen_table` and `ecmult_table`, and the scalar decoders `scalar_from_bytes` (rejects values of `N` or more) and `scalar_from_bytes_mod_order`. |
| `adaptorsig.message` | `Message.raw(data)` for pre-hashed data, and `Message.plain(app_tag, data)` for tagged messages of any length. |
| `adaptorsig.signature` | The 64-byte Schnorr `Signature` (`R` as x-only bytes, `s` as an integer) with `to_bytes`, `from_bytes`, `from_hex`, `random`, `as_tuple`. `str()` gives hex. |
| `adaptorsig.schnorr` | `Schnorr`, `KeyPair` and `NonceKind`: key pairs, signing, verification, challenges and `anticipate_signature`. |
| `adaptorsig.adaptor` | Schnorr adaptor signatures: `EncryptedSignature` and the functions `encrypted_sign`, `encryption_key_for`, `verify_encrypted_signature`, `decrypt_signature`, `recover_decryption_key`. |
| `adaptorsig.ecdsa_signature` | The 64-byte ECDSA `Signature` (`R_x`, `s`, both non-zero scalars). |
| `adaptorsig.ecdsa_adaptor` | ECDSA adaptor signatures: `Adaptor`, `EncryptedSignature` and `PointNonce`. |
| `adaptorsig.quick_bip340` | A minimal BIP-340 scheme with random nonces: `keygen`, `sign`, `verify`, `QuickSignature` and the command-line `main`. |

Errors are raised as `ValueError` (bad encodings, out-of-range scalars,
points with the wrong y parity) or `TypeError` (wrong argument types).
Verification functions return `False`, and key recovery returns `None`,
when the inputs do not match.

## Quick start

```python
from adaptorsig.quick_bip340 import keygen, sign, verify

keypair = keygen()          # (secret scalar, 32-byte x-only public key)
signature = sign(keypair, b"attack at dawn")
assert verify(keypair[1], b"attack at dawn", signature)
```

## Schnorr signatures

`Schnorr(nonce_gen)` takes a `NonceKind`:

- `NonceKind.SYNTHETIC` (the default) hashes 32 fresh random bytes together
  with the secret key and the public inputs;
- `NonceKind.DETERMINISTIC` hashes only the secret key and the public
  inputs, so signing the same message twice gives the same signature.

`Schnorr.verify_only()` builds an instance without a nonce generator; it
verifies but raises `ValueError` if asked to sign.

```python
import secrets

from adaptorsig.ecmult import N
from adaptorsig.message import Message
from adaptorsig.schnorr import NonceKind, Schnorr

schnorr = Schnorr(NonceKind.DETERMINISTIC)
keypair = schnorr.new_keypair(secrets.randbelow(N - 1) + 1)
message = Message.plain("my-app", b"we rolled our own schnorr!")

signature = schnorr.sign(keypair, message)
assert schnorr.verify(keypair.verification_key(), message, signature)
```

`new_keypair` negates the secret key when its public point has an odd
y-coordinate, so `keypair.sk` may differ from the integer passed in.
`verify` expects the public key as a `Point` with even y, which is what
`KeyPair.verification_key()` returns.

A `Message.plain` tag must be 1 to 64 bytes long. It is zero-padded to 64
bytes and hashed before the message, so a signature made for one
application is not valid for another.

## Schnorr adaptor signatures

An adaptor signature is a signature encrypted under a public encryption key.
Whoever holds the matching decryption key can decrypt it; once the
decrypted signature is published, anyone who saw the encrypted one can
recover the decryption key.

```python
from adaptorsig.adaptor import (
    decrypt_signature,
    encrypted_sign,
    encryption_key_for,
    recover_decryption_key,
    verify_encrypted_signature,
)

decryption_key = secrets.randbelow(N - 1) + 1
encryption_key = encryption_key_for(schnorr, decryption_key)

encrypted = encrypted_sign(schnorr, keypair, encryption_key, message)
assert verify_encrypted_signature(
    schnorr, keypair.verification_key(), encryption_key, message, encrypted
)

signature = decrypt_signature(schnorr, decryption_key, encrypted)
assert schnorr.verify(keypair.verification_key(), message, signature)
assert recover_decryption_key(schnorr, encryption_key, encrypted, signature) == decryption_key
```

## ECDSA adaptor signatures

`Adaptor` works on 32-byte message hashes. The encrypted signature carries
a proof that `R_hat = r*G` and `R = r*Y` share the same `r`; its 64 bytes
are a tagged SHA-256 challenge followed by the response scalar. An
`EncryptedSignature` encodes to 162 bytes (`R`, `R_hat`, `s_hat`, proof)
through `to_bytes` / `from_bytes` / `from_hex`, and `str()` gives hex.

```python
import hashlib

from adaptorsig.ecdsa_adaptor import Adaptor
from adaptorsig.ecmult import mul_base

adaptor = Adaptor()
signing_key = secrets.randbelow(N - 1) + 1
verification_key = mul_base(signing_key)
decryption_key = secrets.randbelow(N - 1) + 1
encryption_key = adaptor.encryption_key_for(decryption_key)
message_hash = hashlib.sha256(b"send 1 BTC to Bob").digest()

encrypted = adaptor.encrypted_sign(signing_key, encryption_key, message_hash)
assert adaptor.verify_encrypted_signature(
    verification_key, encryption_key, message_hash, encrypted
)
signature = adaptor.decrypt_signature(decryption_key, encrypted)
assert adaptor.recover_decryption_key(encryption_key, signature, encrypted) == decryption_key
```

`decrypt_signature` always returns a low-s signature, and
`recover_decryption_key` returns `None` for a high-s one.
`Adaptor.verify_only()` can verify, decrypt and recover but not sign.

## Command line

One command is installed. It generates a key, signs a message (by default
`attack at dawn`) and checks the signature, printing the public key, the
signature in hex and `valid` or `invalid`; the exit status is 0 when the
signature is valid.

```
adaptorsig-quick-bip340
adaptorsig-quick-bip340 "some other message"
```

## What it does not do

- It does not create or verify plain ECDSA signatures. `ecdsa_signature`
  only defines the signature type and its encoding; ECDSA signatures come
  from `Adaptor.decrypt_signature`.
- The Schnorr `EncryptedSignature` has no byte or text encoding.
- Keys are plain integers and points; there is no key storage, key file
  format or key derivation.