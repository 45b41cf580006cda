from __future__ import annotations

import hashlib
import hmac
import secrets

from nexgen.config import get_settings

_ALGORITHM = "pbkdf2_sha256"


def _hash_password(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def hash_password(password: str, *, rounds: int | None = None) -> str:
    if rounds is None:
        rounds = get_settings().PASSWORD_PBKDF2_ROUNDS
    salt = secrets.token_hex(16)
    return "{}${}${}${}".format(_ALGORITHM, rounds, salt, _hash_password(password, salt, rounds))


def verify_password(password: str, encoded: str | None) -> bool:
    if not encoded:
        return False
    parts = encoded.split("$")
    if len(parts) != 4 or parts[0] != _ALGORITHM:
        return False
    _, rounds_text, salt, expected = parts
    try:
        rounds = int(rounds_text)
    except ValueError:
        return False
    computed = _hash_password(password, salt, rounds)
    return hmac.compare_digest(computed, expected)


__all__ = ["hash_password", "verify_password"]
