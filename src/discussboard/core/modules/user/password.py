import asyncio

import bcrypt

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hashing with a configurable work factor.

    Passwords longer than 72 UTF-8 bytes are truncated before hashing and
    before verification, so any accepted password can be used to log in.
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Check a password against a stored hash. Malformed hashes and unencodable input never match."""
        try:
            return bcrypt.checkpw(_encode(plaintext), password_hash.encode("utf-8"))
        except ValueError:
            return False

    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, plaintext: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, plaintext, password_hash)


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:MAX_PASSWORD_BYTES]
