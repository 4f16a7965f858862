"""Password Hashing — bcrypt wrappers for the seed script and sign-in.

Invariants:
    - Plaintext passwords are never stored or logged
    - Hashing and checking block the CPU for tens of milliseconds; async callers
      run them through asyncio.to_thread
"""

import bcrypt

DEFAULT_ROUNDS = 10


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Salted bcrypt hash of `password`, as text."""
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False
