"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks. The salt and
the cost factor are embedded in the hash itself ("$2b$10$..."), so
verification needs nothing but the stored string.
"""

from typing import Optional

import bcrypt

from pokecatch.config import settings

# bcrypt only looks at the first 72 bytes of the input.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Learn: The work factor defaults to settings.bcrypt_rounds (10).
    Each +1 doubles the cost. Tests lower it to 4 to stay fast.
    """
    pw_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash.

    A corrupt or non-bcrypt stored hash never matches.
    """
    try:
        pw_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
