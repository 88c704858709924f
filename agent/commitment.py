"""
Commit-reveal helpers matching the on-chain settlement program.

RPS rounds commit to keccak256(choice || salt); coin flips commit to
keccak256(secret) and resolve from keccak256(secret_a || secret_b). The caller
builds and signs the actual transactions.
"""
import secrets

from web3 import Web3

from games.base import CoinSide, InvalidInputError, Move

SECRET_SIZE = 32


def _check_secret(value: bytes, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or len(value) != SECRET_SIZE:
        raise InvalidInputError(f"{name} must be {SECRET_SIZE} bytes")
    return bytes(value)


def generate_salt() -> bytes:
    """Fresh 32-byte salt or coin flip secret."""
    return secrets.token_bytes(SECRET_SIZE)


def move_commitment(move, salt: bytes) -> bytes:
    move = Move.parse(move)
    salt = _check_secret(salt, "salt")
    return bytes(Web3.keccak(bytes([move.value]) + salt))


def verify_move_commitment(commitment: bytes, move, salt: bytes) -> bool:
    return bytes(commitment) == move_commitment(move, salt)


def secret_commitment(secret: bytes) -> bytes:
    return bytes(Web3.keccak(_check_secret(secret, "secret")))


def verify_secret_commitment(commitment: bytes, secret: bytes) -> bool:
    return bytes(commitment) == secret_commitment(secret)


def flip_from_secrets(secret_a: bytes, secret_b: bytes) -> CoinSide:
    """Resolve a coin flip from both revealed secrets (even last byte = Heads)."""
    digest = Web3.keccak(_check_secret(secret_a, "secret_a") + _check_secret(secret_b, "secret_b"))
    return CoinSide.HEADS if digest[31] % 2 == 0 else CoinSide.TAILS
