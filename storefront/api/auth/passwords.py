"""bcrypt password hashing."""

import bcrypt

from storefront.errors import ValidationError

# bcrypt only reads this many bytes of input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt.

    Raises:
        ValidationError: If the password is empty or longer than bcrypt accepts
    """
    encoded = password.encode("utf-8")
    if not encoded:
        raise ValidationError("Password is required")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of password against a stored hash.

    Inputs bcrypt would silently truncate never match.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        # Corrupt stored hash
        return False
