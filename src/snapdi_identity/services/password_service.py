"""bcrypt password hashing with a length policy."""

import base64
import hashlib

import bcrypt

from snapdi_identity.exceptions import WeakPasswordError


class PasswordHashingService:
    """Hash and check account passwords.

    bcrypt only consumes 72 bytes of input, so every password is first
    reduced to the base64 form of its SHA-256 digest (44 ASCII bytes). Two
    passwords sharing a long prefix therefore never share a hash.

    ``hash`` accepts any non-empty password. The 8 to 128 character policy
    is enforced by ``validate_strength``, which callers run on passwords
    chosen by users.

    Examples
    --------
    >>> hasher = PasswordHashingService(rounds=10)
    >>> stored = hasher.hash("correct horse")
    >>> hasher.verify("correct horse", stored)
    True
    """

    MIN_LENGTH = 8
    MAX_LENGTH = 128
    MIN_ROUNDS = 10

    def __init__(self, rounds: int = 12):
        if rounds < self.MIN_ROUNDS:
            msg = f"bcrypt work factor must be at least {self.MIN_ROUNDS}"
            raise ValueError(msg)
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of ``password``.

        Raises
        ------
        WeakPasswordError
            If the password is empty
        """
        if not password:
            raise WeakPasswordError("Password cannot be empty")
        digest = bcrypt.hashpw(self._secret(password), bcrypt.gensalt(self._rounds))
        return digest.decode("ascii")

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Check ``password`` against a stored hash.

        Missing or malformed hashes never match.
        """
        if not (password and password_hash):
            return False
        try:
            return bcrypt.checkpw(self._secret(password), password_hash.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False

    def validate_strength(self, password: str) -> None:
        if not password:
            raise WeakPasswordError("Password cannot be empty")
        length = len(password)
        if length < self.MIN_LENGTH:
            raise WeakPasswordError(
                f"Password must be at least {self.MIN_LENGTH} characters",
            )
        if length > self.MAX_LENGTH:
            raise WeakPasswordError(
                f"Password cannot exceed {self.MAX_LENGTH} characters",
            )

    def needs_rehash(self, password_hash: str) -> bool:
        """True when the hash was not made with this service's work factor."""
        # Modular crypt format: $2b$<cost>$<salt+digest>
        parts = password_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds

    @staticmethod
    def _secret(password: str) -> bytes:
        return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())
