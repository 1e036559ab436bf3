"""
Password hashing for accounts (argon2 through passlib).

``verify_and_upgrade`` lets login transparently re-hash passwords stored with
outdated parameters.
"""
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_and_upgrade(plain: str, stored_hash: str) -> tuple[bool, str | None]:
    """Return (matches, replacement_hash_or_None)."""
    return pwd_context.verify_and_update(plain, stored_hash)
