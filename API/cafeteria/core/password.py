"""Password hashing for staff accounts.

Digests are pbkdf2_sha256 strings produced by passlib; each call draws a fresh
salt, and verification compares in constant time.
"""
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("password_blank")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # Unrecognised or corrupted digest.
        return False
