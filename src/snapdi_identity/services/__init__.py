"""Identity services - JWT, password hashing and one-time tokens."""

from snapdi_identity.services.jwt_service import JWTService
from snapdi_identity.services.one_time_tokens import generate_token, hash_token
from snapdi_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "generate_token",
    "hash_token",
]
