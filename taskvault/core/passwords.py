"""Password hashing with argon2id.

Hashing is CPU-bound, so the public helpers run it in a worker thread and
other requests keep being served meanwhile.
"""

import asyncio
import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


logger = logging.getLogger(__name__)

_hasher = PasswordHasher()

# Verified against when the email is unknown, so both login failures cost the same.
_DUMMY_HASH = _hasher.hash("taskvault-timing-equalizer")


def _verify(password_hash: str, password: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError):
        logger.warning("password_hash_unreadable")
        return False


async def hash_password(password: str) -> str:
    """Return an argon2id hash for the password."""
    return await asyncio.to_thread(_hasher.hash, password)


async def verify_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored hash in constant time."""
    return await asyncio.to_thread(_verify, password_hash, password)


async def burn_verification(password: str) -> None:
    """Run a verification whose result is discarded."""
    await verify_password(_DUMMY_HASH, password)
